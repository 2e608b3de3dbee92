import pytest

from resolver_ops.config.network import CHAINS, address_url, get_chain_config, tx_url


def test_lookup_is_case_insensitive():
    assert get_chain_config("polygon")["chain_id"] == 137
    assert get_chain_config("Amoy")["chain_id"] == 80002
    assert get_chain_config("localhost")["explorer"] is None


def test_unsupported_chain():
    with pytest.raises(ValueError, match="Unsupported chain"):
        get_chain_config("solana")


def test_chain_ids_are_unique():
    ids = [config["chain_id"] for config in CHAINS.values()]
    assert len(ids) == len(set(ids))


def test_explorer_links():
    assert tx_url("0xabc", "polygon") == "https://polygonscan.com/tx/0xabc"
    assert address_url("0xdef", "polygon") == "https://polygonscan.com/address/0xdef#code"
    assert tx_url("0xabc", "localhost") is None
    assert address_url("0xdef", "localhost") is None
