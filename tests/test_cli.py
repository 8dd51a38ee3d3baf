from unittest import mock

import pygame
import pytest

from solongame.cli import main, main_bonus


@pytest.fixture
def dummy_video(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")


def write_map(tmp_path, rows, name="level.ber"):
    path = tmp_path / name
    path.write_text("\n".join(rows) + "\n")
    return str(path)


def test_usage_without_arguments(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Erorr !!\n./solong  <Map name.ber>\n"


def test_bonus_usage_with_too_many_arguments(capsys):
    assert main_bonus(["a.ber", "b.ber"]) == 0
    assert capsys.readouterr().out == "Erorr !!\n./solong_bonus  <Map name.ber>\n"


def test_rejects_wrong_suffix(capsys):
    main(["map.txt"])
    assert capsys.readouterr().out == "Error\nPath is invalid\n"


def test_reports_missing_file(tmp_path, capsys):
    main([str(tmp_path / "missing.ber")])
    assert capsys.readouterr().out == "Error\nOpen failed\n"


def test_reports_unwinnable_map(tmp_path, capsys):
    path = write_map(tmp_path, ["111111", "1P1CE1", "111111"])
    main([path])
    out = capsys.readouterr().out
    assert out.startswith("Error\n")
    assert "You can't WIN" in out


def test_plain_game_rejects_enemy_tile(tmp_path, capsys):
    path = write_map(tmp_path, ["1111111", "1PN0CE1", "1111111"])
    main([path])
    assert capsys.readouterr().out.startswith("Error\nOnly '0' '1' 'P' 'E' 'C'")


def test_bonus_game_accepts_enemy_tile_and_quits(tmp_path, capsys, dummy_video):
    path = write_map(tmp_path, ["1111111", "1P0NCE1", "1111111"])
    with mock.patch("pygame.event.get", return_value=[pygame.event.Event(pygame.QUIT)]):
        assert main_bonus([path]) == 0
    assert "Error" not in capsys.readouterr().out


def test_plain_game_played_to_win(tmp_path, capsys, dummy_video):
    path = write_map(tmp_path, ["11111", "1PCE1", "11111"])
    right = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT)
    with mock.patch("pygame.event.get", side_effect=[[right], [right]]):
        assert main([path]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Moves = 1\n")
    assert out.endswith("You won\n")