import sys

import pytest

from neogrid.font_options import (
    CoarseStyle,
    FontDescription,
    FontEdging,
    FontFeature,
    FontHinting,
    FontOptions,
    FontOptionsError,
    FontStyle,
    SecondaryFontDescription,
    Slant,
    coarse_style_permutations,
    parse_edging,
    parse_font_feature,
    parse_font_name,
    parse_guifont,
    parse_hinting,
    points_to_pixels,
)


def test_parse_one_font_from_guifont_setting():
    options = parse_guifont("Fira Code Mono")
    assert len(options.normal) == 1


def test_parse_many_fonts_from_guifont_setting():
    options = parse_guifont("Fira Code Mono,Console")
    assert len(options.normal) == 2
    assert [f.family for f in options.normal] == ["Fira Code Mono", "Console"]


def test_parse_edging_from_guifont_setting():
    options = parse_guifont("Fira Code Mono:#e-subpixelantialias")
    assert options.edging is FontEdging.SUBPIXEL_ANTI_ALIAS


def test_parse_invalid_edging_from_guifont_setting():
    with pytest.raises(FontOptionsError) as info:
        parse_guifont("Fira Code Mono:#e-aliens")
    assert str(info.value) == "Invalid edging"


def test_parse_hinting_from_guifont_setting():
    options = parse_guifont("Fira Code Mono:#h-slight")
    assert options.hinting is FontHinting.SLIGHT


def test_parse_invalid_hinting_from_guifont_setting():
    with pytest.raises(FontOptionsError) as info:
        parse_guifont("Fira Code Mono:#h-fool")
    assert str(info.value) == "Invalid hinting"


def test_parse_font_size_float_from_guifont_setting():
    options = parse_guifont("Fira Code Mono:h15.5")
    assert options.size == points_to_pixels(15.5)


def test_parse_invalid_font_size_float_from_guifont_setting():
    with pytest.raises(FontOptionsError) as info:
        parse_guifont("Fira Code Mono:h15.a")
    assert str(info.value) == "Invalid size"


def test_parse_invalid_font_width_float_from_guifont_setting():
    with pytest.raises(FontOptionsError) as info:
        parse_guifont("Fira Code Mono:w1.b")
    assert str(info.value) == "Invalid width"


def test_parse_all_params_together_from_guifont_setting():
    options = parse_guifont("Fira Code Mono:h15.5:b:i:#h-slight:#e-alias")
    assert options.size == points_to_pixels(15.5)
    assert options.normal
    for font in options.normal:
        assert font.family == "Fira Code Mono"
        assert font.style == "Bold Italic"
    assert options.edging is FontEdging.ALIAS
    assert options.hinting is FontHinting.SLIGHT


def test_parse_font_name_with_escapes():
    assert parse_font_name("Fira Code Mono") == "Fira Code Mono"
    assert parse_font_name("Fira_Code_Mono") == "Fira Code Mono"
    assert parse_font_name(r"Fira\_Code\_Mono") == "Fira_Code_Mono"
    assert parse_font_name(r"Fira\\_Code\\_Mono") == "Fira\\ Code\\ Mono"
    assert parse_font_name("Fira_Code_Mono\\") == "Fira Code Mono"


def test_parse_font_style():
    desc = FontDescription("Fira Code Mono", "Bold Italic")
    family, style = desc.as_family_and_font_style()
    assert family == "Fira Code Mono"
    assert style.weight == FontStyle.BOLD
    assert style.slant is Slant.ITALIC


def test_parse_font_style_semibold():
    family, style = FontDescription("Fira Code Mono", "SemiBold").as_family_and_font_style()
    assert family == "Fira Code Mono"
    assert style.weight == FontStyle.SEMI_BOLD
    assert style.slant is Slant.UPRIGHT


def test_parse_font_style_variable_weight():
    family, style = FontDescription("Fira Code Mono", "W100").as_family_and_font_style()
    assert family == "Fira Code Mono"
    assert style.weight == 100
    assert style.slant is Slant.UPRIGHT


def test_font_style_without_style_is_default():
    _, style = FontDescription("Mono").as_family_and_font_style()
    assert style == FontStyle(400, 5, Slant.UPRIGHT)


def test_font_style_ignores_unknown_words():
    _, style = FontDescription("Mono", "Fancy Wxyz Oblique").as_family_and_font_style()
    assert style.weight == FontStyle.NORMAL
    assert style.slant is Slant.OBLIQUE


def test_style_unique_and_sorted():
    options = parse_guifont("Mono:i:b:i")
    assert options.normal[0].style == "Bold Italic"


def test_no_style_leaves_none():
    options = parse_guifont("Mono:h12")
    assert options.normal[0].style is None


def test_empty_setting_gives_defaults():
    assert parse_guifont("") == FontOptions()


def test_width_parsed():
    options = parse_guifont("Mono:w3")
    assert options.width == points_to_pixels(3.0)


def test_points_to_pixels_non_mac(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert points_to_pixels(12.0) == 16.0


def test_points_to_pixels_mac(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert points_to_pixels(12.0) == 12.0


def test_parse_edging_and_hinting_names():
    assert parse_edging("alias") is FontEdging.ALIAS
    assert parse_hinting("none") is FontHinting.NONE
    with pytest.raises(FontOptionsError):
        parse_edging("Alias")
    with pytest.raises(FontOptionsError):
        parse_hinting("")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("+liga", FontFeature("liga", 1)),
        ("- calt ", FontFeature("calt", 0)),
        ("ss01=2", FontFeature("ss01", 2)),
    ],
)
def test_parse_font_feature(text, expected):
    assert parse_font_feature(text) == expected


@pytest.mark.parametrize("text", ["liga", "ss01=x", "ss01=70000", "ss01=-1"])
def test_parse_font_feature_invalid(text):
    with pytest.raises(FontOptionsError) as info:
        parse_font_feature(text)
    assert str(info.value) == text


def test_coarse_style_names():
    assert CoarseStyle(True, True).name() == "Bold Italic"
    assert CoarseStyle(True, False).name() == "Bold"
    assert CoarseStyle(False, True).name() == "Italic"
    assert CoarseStyle().name() is None


def test_coarse_style_font_style():
    assert CoarseStyle(True, True).font_style() == FontStyle(700, 5, Slant.ITALIC)
    assert CoarseStyle().font_style() == FontStyle()


def test_permutations_order():
    assert list(coarse_style_permutations()) == [
        CoarseStyle(True, True),
        CoarseStyle(True, False),
        CoarseStyle(False, True),
        CoarseStyle(False, False),
    ]


def test_secondary_fallback():
    primary = [FontDescription("A"), FontDescription("B")]
    assert SecondaryFontDescription(None, "Bold").fallback(primary) == [
        FontDescription("A", "Bold"),
        FontDescription("B", "Bold"),
    ]
    assert SecondaryFontDescription("C", None).fallback(primary) == [FontDescription("C")]


def test_font_list_uses_style_name_and_secondaries():
    options = FontOptions(
        normal=[FontDescription("A")],
        bold=[SecondaryFontDescription("B", None)],
        italic=[SecondaryFontDescription(None, "Oblique")],
    )
    assert options.font_list(CoarseStyle(True, False)) == [FontDescription("B", "Bold")]
    assert options.font_list(CoarseStyle(False, True)) == [FontDescription("A", "Oblique")]
    assert options.font_list(CoarseStyle(True, True)) == [FontDescription("A", "Bold Italic")]
    assert options.font_list(CoarseStyle()) == [FontDescription("A")]


def test_possible_fonts_covers_all_styles():
    options = FontOptions(normal=[FontDescription("A")])
    assert options.possible_fonts() == [
        FontDescription("A", "Bold Italic"),
        FontDescription("A", "Bold"),
        FontDescription("A", "Italic"),
        FontDescription("A"),
    ]


def test_primary_font():
    assert FontOptions().primary_font() is None
    assert parse_guifont("X,Y").primary_font() == FontDescription("X")


def test_equality_ignores_width():
    assert FontOptions(width=3.0) == FontOptions(width=0.0)
    assert FontOptions(size=10.0) != FontOptions(size=11.0)


def test_description_str():
    assert str(FontDescription("Mono", "Bold")) == "Mono Bold"
    assert str(FontDescription("Mono")) == "Mono"