from pathlib import Path

import pytest

from assetmin.options import (
    AssetKind,
    ScriptOptions,
    StylesheetOptions,
    asset_kind_for,
    gzip_enabled,
    option_equals,
    resolve_options,
)


def test_asset_kind_for_extensions():
    assert asset_kind_for(Path("dist/app.js")) is AssetKind.SCRIPT
    assert asset_kind_for("dist/site.css") is AssetKind.STYLESHEET
    assert asset_kind_for("APP.JS") is AssetKind.SCRIPT
    assert asset_kind_for("Site.Css") is AssetKind.STYLESHEET
    assert asset_kind_for("index.html") is AssetKind.UNRECOGNIZED
    assert asset_kind_for("Makefile") is AssetKind.UNRECOGNIZED
    assert asset_kind_for("app.js.map") is AssetKind.UNRECOGNIZED


@pytest.mark.parametrize("value", ["true", "TRUE", "True", "tRuE", True])
def test_gzip_enabled_accepts_true_any_case(value):
    assert gzip_enabled({"gzip": value})


@pytest.mark.parametrize("value", ["1", "yes", "on", "false", "", " true", False, None])
def test_gzip_disabled_for_other_values(value):
    assert not gzip_enabled({"gzip": value})


def test_gzip_disabled_when_absent():
    assert not gzip_enabled({})


def test_option_equals_requires_presence():
    assert not option_equals({}, "commentMode", "none")
    assert option_equals({"commentMode": "None"}, "commentMode", "none")


def test_script_defaults():
    options = resolve_options(AssetKind.SCRIPT, {})
    assert options == ScriptOptions(
        keep_important_comments=True, term_semicolons=False, gzip=False
    )


def test_script_options_from_config():
    options = resolve_options(
        AssetKind.SCRIPT,
        {
            "preserveImportantComments": "false",
            "termSemicolons": "TRUE",
            "gzip": "true",
            "unknownKey": "whatever",
        },
    )
    assert options == ScriptOptions(
        keep_important_comments=False, term_semicolons=True, gzip=True
    )


def test_stylesheet_options_from_config():
    assert resolve_options(AssetKind.STYLESHEET, {}) == StylesheetOptions()
    options = resolve_options(
        AssetKind.STYLESHEET, {"commentMode": "none", "termSemicolons": True}
    )
    assert options.keep_important_comments is False
    assert options.term_semicolons is True
    assert options.gzip is False


def test_unparseable_flag_is_disabled():
    options = resolve_options(AssetKind.SCRIPT, {"preserveImportantComments": "maybe"})
    assert options.keep_important_comments is False


def test_unrecognized_kind_has_no_options():
    with pytest.raises(ValueError):
        resolve_options(AssetKind.UNRECOGNIZED, {})
