"""Tests for ENS name hashing helpers."""

import pytest

from ens_mcp.core.clients.names import (
    eth_2ld_label,
    is_eth_2ld,
    labelhash,
    namehash,
    normalize_name,
    reverse_name,
)
from ens_mcp.core.errors import ErrorKind, InvalidNameError


class TestNamehash:
    """Tests for namehash()."""

    def test_empty_name_is_zero_node(self):
        assert namehash("") == b"\x00" * 32

    def test_eth_node(self):
        assert (
            namehash("eth").hex()
            == "93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"
        )

    def test_second_level_name(self):
        assert (
            namehash("vitalik.eth").hex()
            == "ee6c4522aab0003e8d14cd40a6af439055fd2577951148c14b6cea9a53475835"
        )

    def test_normalizes_case_before_hashing(self):
        assert namehash("Vitalik.ETH") == namehash("vitalik.eth")

    def test_invalid_name_raises_invalid_input(self):
        with pytest.raises(InvalidNameError) as exc_info:
            namehash("bad name.eth")
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    def test_labelhash_is_keccak_of_label(self):
        assert (
            labelhash("eth").hex()
            == "4f5b812789fc606be1b3b16908db13fc7a9adf7ca72641f84d75b47069d3d7f0"
        )


class TestNameShapes:
    """Tests for is_eth_2ld() and reverse_name()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("vitalik.eth", True),
            ("sub.vitalik.eth", False),
            ("eth", False),
            (".eth", False),
            ("vitalik.xyz", False),
        ],
    )
    def test_is_eth_2ld(self, name, expected):
        assert is_eth_2ld(name) is expected

    def test_reverse_name_lowercases_and_strips_prefix(self):
        address = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
        assert reverse_name(address) == "d8da6bf26964af9d7eed9e03e53415d37aa96045.addr.reverse"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("vitalik.eth", "vitalik"),
            ("Vitalik.eth", "vitalik"),
            ("VITALIK.ETH", "vitalik"),
            ("sub.vitalik.eth", None),
            ("vitalik.xyz", None),
        ],
    )
    def test_eth_2ld_label_is_normalized(self, name, expected):
        assert eth_2ld_label(name) == expected


class TestNormalizeName:
    """Tests for normalize_name()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("vitalik", "vitalik.eth"),
            ("vitalik.eth", "vitalik.eth"),
            ("sub.vitalik.eth", "sub.vitalik.eth"),
            ("nick.xyz", "nick.xyz.eth"),
            ("  vitalik  ", "vitalik.eth"),
        ],
    )
    def test_appends_suffix_when_absent(self, raw, expected):
        assert normalize_name(raw) == expected

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidNameError):
            normalize_name("   ")
