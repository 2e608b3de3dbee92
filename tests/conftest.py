"""
Shared fixtures: a fake web3 surface good enough for the Resolver workflow.

Nothing here talks to a node. Contract functions are small objects that
record their arguments and return canned values.
"""
import itertools
import json
import time
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from web3.exceptions import ContractLogicError

from resolver_ops.helpers.signer import Signer

TEST_KEY = "0x" + "11" * 32
SIGNER_ADDRESS = "0x19e7e376e7c213b7e7e7e46cc70a5dd086daff2a"
USDC = "0x2791bca1f2de4661ed88a30c99a7a9449aa84174"
USDT = "0xc2132d05d31c914a87c6611c10748aeb04b58e8f"
ROUTER = "0xa5e0829caced8ffdd4de3c43696c57f7d7a678ff"
RESOLVER_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"

RESOLVER_ENV = ("RPC_URL", "PRIVATE_KEY", "CHAIN", "ETHERSCAN_API_KEY", "POLYGONSCAN_API_KEY",
                "RESOLVER_ARTIFACT", "DEPLOYMENTS_DIR", "RESOLVER_ADDRESS", "LOG_DIR")


class FakeCall:
    def __init__(self, contract, name, args):
        self.contract = contract
        self.name = name
        self.args = args

    def call(self, tx=None):
        self.contract.calls.append((self.name, self.args, tx))
        result = self.contract.returns[self.name]
        if isinstance(result, Exception):
            raise result
        return result(*self.args) if callable(result) else result

    def build_transaction(self, tx):
        self.contract.calls.append((self.name, self.args, tx))
        if self.name == "swapExactIn" and self.args[5] < int(time.time()):
            raise ContractLogicError("execution reverted: UniswapV2Router: EXPIRED")
        return {**tx, "to": self.contract.address, "data": "0xdeadbeef", "gas": 100_000,
                "maxFeePerGas": 2 * 10**9, "maxPriorityFeePerGas": 10**9, "chainId": 137, "value": 0}


class FakeFunctions:
    def __init__(self, contract):
        self._contract = contract

    def __getattr__(self, name):
        return lambda *args: FakeCall(self._contract, name, args)


class FakeContract:
    def __init__(self, address=None, abi=None, bytecode=None, returns=None):
        self.address = address
        self.abi = abi
        self.bytecode = bytecode
        self.returns = returns if returns is not None else {}
        self.calls = []
        self.functions = FakeFunctions(self)

    def constructor(self, *args):
        return FakeCall(self, "constructor", args)


class FakeEth:
    def __init__(self, chain_id=137):
        self.chain_id = chain_id
        self.contract_returns = {}
        self.contracts = []
        self.sent = []
        self.receipt_status = 1
        self._addresses = (f"0x{i:040x}" for i in itertools.count(0xC0FFEE))

    def contract(self, address=None, abi=None, bytecode=None):
        c = FakeContract(address, abi, bytecode, returns=self.contract_returns)
        self.contracts.append(c)
        return c

    def get_transaction_count(self, address, block="latest"):
        return len(self.sent)

    def send_raw_transaction(self, raw):
        self.sent.append(raw)
        return HexBytes(len(self.sent).to_bytes(32, "big"))

    def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        return {
            "status": self.receipt_status,
            "contractAddress": next(self._addresses),
            "blockNumber": 1000 + len(self.sent),
            "gasUsed": 1_234_567,
            "transactionHash": tx_hash,
        }


class FakeWeb3:
    def __init__(self, chain_id=137, connected=True):
        self.eth = FakeEth(chain_id)
        self.connected = connected

    def is_connected(self):
        return self.connected


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test in an empty directory with no resolver env vars."""
    for name in RESOLVER_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_w3():
    return FakeWeb3()


@pytest.fixture
def signer(fake_w3):
    account = MagicMock()
    account.address = SIGNER_ADDRESS
    account.sign_transaction.side_effect = lambda tx: SimpleNamespace(raw_transaction=b"\x02" + json.dumps(tx, default=str).encode())
    return Signer(account=account, w3=fake_w3)


@pytest.fixture
def artifact_file(tmp_path):
    """A Hardhat artifact plus its dbg and build-info files."""
    from resolver_ops.config.abis import RESOLVER_ABI

    art_dir = tmp_path / "artifacts" / "contracts" / "Resolver.sol"
    info_dir = tmp_path / "artifacts" / "build-info"
    art_dir.mkdir(parents=True)
    info_dir.mkdir(parents=True)

    artifact = art_dir / "Resolver.json"
    artifact.write_text(json.dumps({
        "_format": "hh-sol-artifact-1",
        "contractName": "Resolver",
        "sourceName": "contracts/Resolver.sol",
        "abi": RESOLVER_ABI,
        "bytecode": "0x6080604052",
        "deployedBytecode": "0x6080",
    }))
    (art_dir / "Resolver.dbg.json").write_text(json.dumps({
        "_format": "hh-sol-dbg-1",
        "buildInfo": "../../build-info/abc123.json",
    }))
    (info_dir / "abc123.json").write_text(json.dumps({
        "solcVersion": "0.8.17",
        "solcLongVersion": "0.8.17+commit.8df45f5f",
        "input": {"language": "Solidity", "sources": {"contracts/Resolver.sol": {"content": "contract Resolver {}"}}},
    }))
    return artifact
