from pathlib import Path

import pytest

from config_io import load_json_config, load_optional_config
from config_parsing import parse_game_config, parse_generator_config, parse_palette
from models import GameConfig, GeneratorConfig, Palette
from utils import as_color, format_elapsed

ROOT_DIR = Path(__file__).resolve().parents[1]


def test_empty_config_gives_defaults():
    assert parse_generator_config({}) == GeneratorConfig()
    assert parse_game_config({}) == GameConfig()


def test_generator_overrides():
    cfg = parse_generator_config(
        {"generator": {"size": 12, "min_obstacles": 5, "max_obstacles": 5, "treasures": 1}}
    )
    assert cfg.size == 12
    assert cfg.min_obstacles == cfg.max_obstacles == 5
    assert cfg.treasures == 1
    assert cfg.scatter_share == 0.8


@pytest.mark.parametrize(
    "section",
    [
        {"min_obstacles": 31, "max_obstacles": 30},
        {"size": 3},
        {"size": "big"},
        {"size": True},
        {"treasures": -1},
        {"scatter_share": 1.5},
        {"cluster_density": "dense"},
        {"max_maps": 0},
        {"scatter_attempts": 0},
    ],
)
def test_bad_generator_values_raise(section):
    with pytest.raises(ValueError):
        parse_generator_config({"generator": section})


def test_blank_map_prefix_keeps_default():
    assert parse_generator_config({"generator": {"map_prefix": "  "}}).map_prefix == "map"


def test_non_dict_section_is_ignored():
    assert parse_generator_config({"generator": [1, 2]}) == GeneratorConfig()


def test_game_overrides():
    cfg = parse_game_config(
        {"game": {"hint_cost": 5, "fog_of_war": False, "title": "  ", "maps_dir": "maps"}}
    )
    assert cfg.hint_cost == 5
    assert cfg.fog_of_war is False
    assert cfg.title == "Treasure Hunt"
    assert cfg.maps_dir == "maps"


@pytest.mark.parametrize("flag", ["false", 0, 1, None])
def test_fog_of_war_must_be_a_boolean(flag):
    with pytest.raises(ValueError, match="fog_of_war"):
        parse_game_config({"game": {"fog_of_war": flag}})


def test_game_rejects_tiny_cells():
    with pytest.raises(ValueError):
        parse_game_config({"game": {"cell_size": 2}})


def test_palette_falls_back_per_color():
    palette = parse_palette({"colors": {"wall": [300, -4, 10], "hint": "green"}})
    assert palette.wall == (255, 0, 10)
    assert palette.hint == Palette().hint
    assert palette.player == Palette().player


def test_as_color_rejects_short_and_garbage():
    assert as_color([1, 2], (9, 9, 9)) == (9, 9, 9)
    assert as_color(["a", 2, 3], (9, 9, 9)) == (9, 9, 9)
    assert as_color((1, 2, 3, 4), (9, 9, 9)) == (1, 2, 3)


def test_load_json_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_config(tmp_path / "nope.json")


def test_load_json_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_load_json_config_requires_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SystemExit):
        load_json_config(path)


def test_load_optional_config_none():
    assert load_optional_config(None) == {}


def test_shipped_config_parses():
    cfg = load_json_config(ROOT_DIR / "config.json")
    assert parse_generator_config(cfg) == GeneratorConfig()
    game = parse_game_config(cfg)
    assert game.starting_score == 100
    assert game.palette.treasure == (255, 215, 0)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (65, "01:05"), (59.9, "00:59"), (3605, "00:05"), (-3, "00:00")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected
