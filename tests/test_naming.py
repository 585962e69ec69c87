from pathlib import Path

import pytest

from assetmin.naming import ArtifactPaths, artifact_paths, gzip_path_for, min_path_for


@pytest.mark.parametrize(
    "source, expected",
    [
        ("app.js", "app.min.js"),
        ("site.css", "site.min.css"),
        ("dist/js/app.JS", "dist/js/app.min.JS"),
        ("vendor.bundle.js", "vendor.bundle.min.js"),
        ("LICENSE", "LICENSE.min"),
    ],
)
def test_min_path_for(source, expected):
    assert min_path_for(source) == Path(expected)


def test_gzip_path_for():
    assert gzip_path_for(Path("dist/app.min.js")) == Path("dist/app.min.js.gz")


def test_artifact_paths_are_stable(tmp_path):
    source = tmp_path / "app.js"
    first = artifact_paths(source)
    assert first == artifact_paths(source)
    assert first == ArtifactPaths(
        source_file=source,
        min_file=tmp_path / "app.min.js",
        gzip_file=tmp_path / "app.min.js.gz",
    )
    # Naming never touches the filesystem
    assert not source.exists()
    assert not first.min_file.exists()


def test_no_extension_has_no_trailing_dot():
    assert not min_path_for("README").name.endswith(".")
