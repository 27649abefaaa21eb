import pytest

from sitepolish.colors import (
    brighten,
    check_contrast,
    contrast_ratio,
    darken,
    generate_color_harmony,
    generate_color_variations,
    get_button_colors,
    get_contrast_safe_text_color,
    get_header_text_color,
    is_light_color,
    is_valid_color,
    luminance,
    parse_color,
    rotate_hue,
)


def test_parse_color_formats():
    assert parse_color("#fff") == (255, 255, 255)
    assert parse_color("#1E3A8A") == (30, 58, 138)
    assert parse_color("#1e3a8aff") == (30, 58, 138)
    assert parse_color("rgba(10, 20, 30, 0.5)") == (10, 20, 30)
    assert parse_color("white") == (255, 255, 255)
    assert parse_color("Navy") == (0, 0, 128)
    assert parse_color("rebeccapurple") == (102, 51, 153)
    assert parse_color("hsl(0, 100%, 50%)") == (255, 0, 0)
    assert parse_color("hsla(222, 47%, 11%, 0.9)") == (15, 23, 41)
    assert parse_color("hsl(240deg 100% 25%)") == (0, 0, 128)
    with pytest.raises(ValueError):
        parse_color("not-a-color")
    assert not is_valid_color("#12")


def test_black_on_white_contrast_is_21():
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21, rel=1e-3)
    result = check_contrast("#000000", "#ffffff")
    assert result["passes_aa"] and result["passes_aaa"]
    assert result["level"] == "AAA"


def test_large_text_thresholds():
    # ~3.5:1 fails AA for body text but passes for large text
    assert not check_contrast("#888888", "#ffffff")["passes_aa"]
    assert check_contrast("#888888", "#ffffff", large_text=True)["passes_aa"]


def test_luminance_bounds():
    assert luminance("#000000") == 0
    assert luminance("#ffffff") == pytest.approx(1)
    assert is_light_color("#f5f5f5")
    assert not is_light_color("#1a1d2e")


def test_header_text_color_is_readable():
    assert get_header_text_color("#1a1d2e") == "#ffffff"
    assert get_header_text_color("#ffffff") == "#2d3748"
    for background in ("#00bcd4", "#777777", "#ffcc00", "#0a0e1a"):
        assert contrast_ratio(get_header_text_color(background), background) >= 4.5


def test_header_text_color_for_named_and_hsl_backgrounds():
    assert get_header_text_color("navy") == "#ffffff"
    assert get_header_text_color("hsl(222, 47%, 11%)") == "#ffffff"
    assert get_header_text_color("whitesmoke") == "#2d3748"
    assert get_header_text_color("var(--brand-dark)") == "#ffffff", "Unreadable colors fall back to white"


def test_contrast_safe_text_color_and_buttons():
    assert get_contrast_safe_text_color("#ffffff") == "#1a1a1a"
    button = get_button_colors("#1e3a8a")
    assert button == {"background": "#1e3a8a", "text": "#ffffff"}


def test_darken_and_brighten_move_lightness():
    base = "#3366cc"
    assert luminance(darken(base)) < luminance(base) < luminance(brighten(base))


def test_rotate_hue_full_turn_is_identity():
    assert rotate_hue("#3366cc", 360) == "#3366cc"
    assert rotate_hue("#ff0000", 120) == "#00ff00"


@pytest.mark.parametrize("harmony,count", [
    ("complementary", 2),
    ("split-complementary", 3),
    ("analogous", 3),
    ("triadic", 3),
    ("tetradic", 4),
    ("monochromatic", 4),
])
def test_harmonies_append_neutrals(harmony, count):
    palette = generate_color_harmony("#1e3a8a", harmony)
    assert palette["harmony"] == harmony
    assert len(palette["colors"]) == count + 3
    assert palette["colors"][-3:] == ["#FFFFFF", "#F5F5F5", "#333333"]


def test_unknown_harmony_raises():
    with pytest.raises(ValueError):
        generate_color_harmony("#1e3a8a", "rainbow")


def test_color_variations():
    variations = generate_color_variations("#1e3a8a")
    assert len(variations["lighter"]) == 3
    assert len(variations["darker"]) == 3
    assert luminance(variations["darker"][2]) <= luminance(variations["darker"][0])
