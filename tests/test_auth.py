"""Tests for pod_rca.auth.TokenProvider."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from pod_rca.auth import TokenProvider


def test_reads_token_as_bearer(tmp_path) -> None:
    path = tmp_path / "token"
    path.write_text("  secret-token \n")
    assert TokenProvider(path).get_token() == "Bearer secret-token"


def test_missing_file_gives_empty_token(tmp_path) -> None:
    assert TokenProvider(tmp_path / "nope").get_token() == ""


def test_token_read_once(tmp_path) -> None:
    path = tmp_path / "token"
    path.write_text("first")
    provider = TokenProvider(path)
    assert provider.get_token() == "Bearer first"

    path.write_text("second")
    assert provider.get_token() == "Bearer first"


def test_first_read_wins_even_when_empty(tmp_path) -> None:
    path = tmp_path / "token"
    provider = TokenProvider(path)
    assert provider.get_token() == ""

    path.write_text("late")
    assert provider.get_token() == ""


def test_concurrent_readers_share_one_value(tmp_path) -> None:
    path = tmp_path / "token"
    path.write_text("shared")
    provider = TokenProvider(path)
    with ThreadPoolExecutor(max_workers=8) as pool:
        tokens = set(pool.map(lambda _: provider.get_token(), range(32)))
    assert tokens == {"Bearer shared"}
