from __future__ import annotations

from pathlib import Path

from headjump.config.themes import ThemeSwitcher, hex_to_rgb, list_themes, load_theme


def test_bundled_themes_are_listed() -> None:
    assert list_themes() == ["dark", "light"]


def test_load_dark_theme() -> None:
    theme = load_theme("dark")

    assert theme.name == "dark"
    assert theme.toggle_label == "Light Mode"
    assert theme.colors.to_rgb("field") == (0x1F, 0x25, 0x33)
    # Labels not in the file fall back to the defaults
    assert theme.messages.start_button == "Start Game"


def test_missing_theme_falls_back_to_defaults(tmp_path: Path) -> None:
    theme = load_theme("sepia", tmp_path)

    assert theme.name == "sepia"
    assert theme.colors.field == "#DCEBFA"


def test_unknown_color_name_uses_text_color() -> None:
    colors = load_theme("light").colors
    assert colors.to_rgb("nope") == hex_to_rgb(colors.text)


def test_switcher_toggles_between_light_and_dark() -> None:
    switcher = ThemeSwitcher("light")
    assert switcher.current.name == "light"

    assert switcher.toggle().name == "dark"
    assert switcher.current.name == "dark"
    assert switcher.toggle().name == "light"


def test_switcher_with_custom_directory(tmp_path: Path) -> None:
    (tmp_path / "mono.yaml").write_text(
        "name: mono\ntoggle_label: Color\ncolors:\n  field: '#FFFFFF'\n",
        encoding="utf-8",
    )
    switcher = ThemeSwitcher("light", tmp_path)

    # "light" is not in the directory, so it comes from the defaults
    assert switcher.current.name == "light"
    theme = switcher.toggle()
    assert theme.name == "mono"
    assert theme.colors.to_rgb("field") == (255, 255, 255)
