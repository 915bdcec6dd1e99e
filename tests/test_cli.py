from datetime import datetime, timezone

import pytest

from tronkit.address import base58_to_address
from tronkit.cli import format_timestamp, main, parse_contract_human_readable
from tronkit.config import CONFIG_FILE_NAME, load_config

VALID = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"
OTHER = "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"


def test_parse_contract_converts_addresses():
    raw = bytes(base58_to_address(VALID))
    result = parse_contract_human_readable(
        {"OwnerAddress": raw, "ToAddress": raw, "Amount": 5, "XXX_unrecognized": b""}
    )
    assert result["OwnerAddress"] == VALID
    assert result["ToAddress"] == VALID
    assert result["Amount"] == 5
    assert "XXX_unrecognized" not in result


def test_parse_contract_converts_votes():
    votes = [
        {"VoteAddress": bytes(base58_to_address(VALID)), "VoteCount": 3},
        {"VoteAddress": bytes(base58_to_address(OTHER)), "VoteCount": 9},
    ]
    result = parse_contract_human_readable({"Votes": votes})
    assert result["Votes"] == {VALID: 3, OTHER: 9}


def test_parse_contract_leaves_input_alone():
    raw = bytes(base58_to_address(VALID))
    fields = {"OwnerAddress": raw}
    result = parse_contract_human_readable(fields)
    assert result["OwnerAddress"] == VALID
    assert fields["OwnerAddress"] == raw


def test_format_timestamp_epoch():
    assert format_timestamp(0) == "1970-01-01T00:00:00Z"


def test_format_timestamp_drops_milliseconds():
    assert format_timestamp(1_600_000_000_999) == format_timestamp(1_600_000_000_000)


def test_format_timestamp_round_trip():
    seconds = 1_700_000_123
    text = format_timestamp(seconds * 1000)
    parsed = datetime.strptime(text, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
    assert int(parsed.timestamp()) == seconds


def test_base58_to_addr_prints_hex(tmp_path, capsys):
    code = main(["--config-dir", str(tmp_path), "utility", "base58-to-addr", VALID])
    assert code == 0
    assert capsys.readouterr().out.strip() == base58_to_address(VALID).hex()


def test_addr_to_base58_round_trip(tmp_path, capsys):
    hex_text = base58_to_address(OTHER).hex()
    code = main(["--config-dir", str(tmp_path), "utility", "addr-to-base58", hex_text])
    assert code == 0
    assert capsys.readouterr().out.strip() == OTHER


def test_base58_to_addr_rejects_bad_address(tmp_path, capsys):
    code = main(["--config-dir", str(tmp_path), "utility", "base58-to-addr", "notanaddress"])
    assert code == 1
    assert "Error" in capsys.readouterr().err


def test_config_set_then_get(tmp_path, capsys):
    assert main(["--config-dir", str(tmp_path), "config", "set", "verbose", "true"]) == 0
    assert load_config(tmp_path / CONFIG_FILE_NAME).verbose is True
    capsys.readouterr()
    assert main(["--config-dir", str(tmp_path), "config", "get", "verbose"]) == 0
    assert capsys.readouterr().out.strip() == "true"


def test_config_set_unknown_parameter(tmp_path, capsys):
    code = main(["--config-dir", str(tmp_path), "config", "set", "colour", "red"])
    assert code == 1
    assert "parameter not found" in capsys.readouterr().err


def test_main_creates_config_file(tmp_path):
    directory = tmp_path / "nested"
    assert main(["--config-dir", str(directory), "utility", "metrics"]) == 0
    assert (directory / CONFIG_FILE_NAME).exists()


def test_version_reports_on_stderr(tmp_path, capsys):
    assert main(["--config-dir", str(tmp_path), "version"]) == 0
    assert capsys.readouterr().err.startswith("TronCTL.")


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["nonsense"])