"""Tests for the inline options localization pass."""

from __future__ import annotations

from pathlib import Path

from prefpanel.infrastructure.document import parse_document
from prefpanel.infrastructure.l10n import load_properties, localize_inline_options, make_localizer

_DOC = (
    "<page>"
    '<setting pref-name="mode" data-jetpack-id="addon" title="Mode" desc="Pick one">'
    '<menulist><menupopup><menuitem value="a" label="Alpha"/></menupopup></menulist>'
    "</setting>"
    '<setting pref-name="purge" data-jetpack-id="addon" title="Purge">'
    '<button pref-name="purge" data-jetpack-id="addon" label="Purge now"/>'
    "</setting>"
    '<setting pref-name="mode" data-jetpack-id="other" title="Other mode"/>'
    "</page>"
)


class TestLocalize:
    def test_rewrites_known_keys(self) -> None:
        doc = parse_document(_DOC)
        localize_inline_options(
            doc,
            {
                "mode_title": "Modus",
                "mode_description": "Wähle einen",
                "mode_options.Alpha": "Alfa",
                "purge_label": "Jetzt leeren",
            },
            "addon",
        )
        mode = doc.getElementsByTagName("setting")[0]
        assert mode.getAttribute("title") == "Modus"
        assert mode.getAttribute("desc") == "Wähle einen"
        assert doc.getElementsByTagName("menuitem")[0].getAttribute("label") == "Alfa"
        assert doc.getElementsByTagName("button")[0].getAttribute("label") == "Jetzt leeren"

    def test_missing_keys_leave_text(self) -> None:
        doc = parse_document(_DOC)
        localize_inline_options(doc, {}, "addon")
        assert doc.getElementsByTagName("setting")[0].getAttribute("title") == "Mode"

    def test_scoped_to_addon(self) -> None:
        doc = parse_document(_DOC)
        make_localizer({"mode_title": "Modus"}, "addon")(doc)
        assert doc.getElementsByTagName("setting")[2].getAttribute("title") == "Other mode"


class TestLoadProperties:
    def test_parses_properties(self, tmp_path: Path) -> None:
        path = tmp_path / "de.properties"
        path.write_text("# comment\n! also comment\nmode_title = Modus\npurge_label: Leeren\n\n")
        assert load_properties(path) == {"mode_title": "Modus", "purge_label": "Leeren"}
