import json
import logging
from unittest.mock import MagicMock

import pytest
from web3.exceptions import BadFunctionCallOutput

from resolver_ops.config.contracts import AddressBook
from resolver_ops.config.logging_config import PACKAGE_LOGGER
from resolver_ops.errors import RpcConnectionError
from resolver_ops.setup import cli as cli_module
from resolver_ops.setup.cli import main
from resolver_ops.setup.verify import VerificationResult

from conftest import RESOLVER_ADDRESS, ROUTER, TEST_KEY, USDC, USDT


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("PRIVATE_KEY", TEST_KEY)
    monkeypatch.setenv("RPC_URL", "http://127.0.0.1:8545")


@pytest.fixture
def use_signer(monkeypatch, signer):
    monkeypatch.setattr(cli_module, "fetch_signer", lambda settings: signer)
    return signer


def _output(capsys):
    return json.loads(capsys.readouterr().out)


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "deploy" in capsys.readouterr().out


def test_unknown_chain_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["quote", "--chain", "fantom"])
    assert exc.value.code == 2


def test_deploy_records_address(env, use_signer, artifact_file, tmp_path, capsys):
    assert main(["deploy", "--no-verify", "--artifact", str(artifact_file)]) == 0

    out = _output(capsys)
    assert out["resolver"].startswith("0x") and len(out["resolver"]) == 42
    assert out["verified"] is False
    assert out["explorer"] == f"https://polygonscan.com/address/{out['resolver']}#code"

    book = json.loads((tmp_path / "deployments" / "polygon.json").read_text())
    assert book["resolver"] == out["resolver"]
    assert book["deployments"]["resolver"]["tx_hash"] == out["tx"]


def test_deploy_verification_failure_is_not_fatal(env, use_signer, artifact_file, monkeypatch, capsys):
    verify = MagicMock(return_value=VerificationResult(False, "Invalid API Key"))
    monkeypatch.setattr(cli_module, "verify_contract", verify)

    assert main(["deploy", "--artifact", str(artifact_file)]) == 0
    assert _output(capsys)["verified"] is False
    verify.assert_called_once()


def test_deploy_without_artifact_fails(env, use_signer, capsys):
    assert main(["deploy", "--no-verify"]) == 1
    assert capsys.readouterr().out == ""


def test_quote(env, use_signer, fake_w3, monkeypatch, capsys):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)
    fake_w3.eth.contract_returns["findBestPathExactIn"] = (ROUTER, [USDC, USDT], 9_991234)

    assert main(["quote", "--from", "USDC", "--to", "USDT", "--amount", "10"]) == 0

    out = _output(capsys)
    assert out["amountIn"] == 10_000000
    assert out["amountOut"] == 9_991234
    assert out["amountOutFormatted"] == "9.991234"
    assert [a.lower() for a in out["path"]] == [USDC, USDT]
    name, args, tx = fake_w3.eth.contracts[-1].calls[-1]
    assert name == "findBestPathExactIn" and args[2] == 10_000000


def test_quote_raw_amount(env, use_signer, fake_w3, monkeypatch, capsys):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)
    fake_w3.eth.contract_returns["findBestPathExactIn"] = (ROUTER, [USDC, USDT], 1)

    assert main(["quote", "--amount", "12345", "--raw"]) == 0
    out = _output(capsys)
    assert out["amountIn"] == 12345
    assert "amountOutFormatted" not in out


def test_quote_survives_unknown_output_decimals(env, use_signer, fake_w3, monkeypatch, capsys, caplog):
    unknown = "0x" + "ab" * 20
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)
    fake_w3.eth.contract_returns["findBestPathExactIn"] = (ROUTER, [USDC, unknown], 42)
    fake_w3.eth.contract_returns["decimals"] = BadFunctionCallOutput("Could not decode contract function call")

    assert main(["quote", "--from", "USDC", "--to", unknown, "--amount", "1"]) == 0

    out = _output(capsys)
    assert out["amountOut"] == 42
    assert [a.lower() for a in out["path"]] == [USDC, unknown]
    assert "amountOutFormatted" not in out
    assert "Cannot format amountOut" in caplog.text


def test_quote_without_resolver_address(env, use_signer, capsys, caplog):
    assert main(["quote"]) == 1
    assert "RESOLVER_ADDRESS" in caplog.text


def test_unreachable_rpc_stops_before_binding(env, monkeypatch, capsys):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)

    def refuse(settings):
        raise RpcConnectionError("Failed to connect to RPC endpoint http://127.0.0.1:8545")

    bind = MagicMock()
    monkeypatch.setattr(cli_module, "fetch_signer", refuse)
    monkeypatch.setattr(cli_module, "fetch_contract", bind)

    assert main(["quote"]) == 1
    bind.assert_not_called()
    assert capsys.readouterr().out == ""


def test_missing_private_key(monkeypatch, caplog):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)
    assert main(["quote"]) == 1
    assert "PRIVATE_KEY" in caplog.text


def test_swap_is_submitted_without_waiting(env, use_signer, fake_w3, monkeypatch, capsys):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)

    argv = ["swap", "--router", ROUTER, "--amount-in", "10", "--amount-out-min", "9.9", "--path", "USDC", "USDT"]
    assert main(argv) == 0

    out = _output(capsys)
    assert out["status"] == "pending"
    assert out["tx"].startswith("0x") and len(out["tx"]) == 66
    name, args, tx = fake_w3.eth.contracts[-1].calls[-1]
    assert name == "swapExactIn"
    assert args[1:3] == (10_000000, 9_900000)
    assert args[4].lower() == use_signer.address.lower()


def test_swap_wait(env, use_signer, fake_w3, monkeypatch, capsys):
    monkeypatch.setenv("RESOLVER_ADDRESS", RESOLVER_ADDRESS)

    argv = ["swap", "--router", ROUTER, "--amount-in", "1", "--amount-out-min", "0",
            "--path", USDC, USDT, "--raw", "--wait"]
    assert main(argv) == 0
    out = _output(capsys)
    assert out["status"] == "mined"
    assert out["block"] == 1001


def test_verify_reports_failure(env, artifact_file, monkeypatch, capsys):
    monkeypatch.setattr(
        cli_module, "verify_contract",
        MagicMock(return_value=VerificationResult(False, "Fail - Unable to verify", "guid")),
    )
    argv = ["verify", "--address", RESOLVER_ADDRESS, "--artifact", str(artifact_file)]
    assert main(argv) == 1
    out = _output(capsys)
    assert out["verified"] is False and out["guid"] == "guid"


def test_address_command(tmp_path, capsys):
    AddressBook("polygon", tmp_path / "deployments").record_deployment("resolver", RESOLVER_ADDRESS)
    assert main(["address"]) == 0
    assert _output(capsys) == {"resolver": RESOLVER_ADDRESS}
