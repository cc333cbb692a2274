"""Tests for the process command."""

from taxpj.cli.main import cli


def _process(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "process", *args])


def test_process_dashboard(cli_runner, temp_db, sample_profile, ofx_file):
    result = _process(cli_runner, temp_db, str(ofx_file), "--profile", "BANCO DO BRASIL")

    assert result.exit_code == 0
    assert "Imported 2 transaction(s) from extrato.ofx" in result.output
    assert "Janeiro de 2024" in result.output
    # OFX yield is estimated at 10% of the 500.00 redemption
    assert "R$ 50,00" in result.output
    assert "R$ 1.000,00" in result.output


def test_process_ledger(cli_runner, temp_db, sample_profile, ofx_file):
    result = _process(
        cli_runner, temp_db, str(ofx_file), "--profile", sample_profile.id, "--view", "ledger"
    )

    assert result.exit_code == 0
    assert "Ledger - Janeiro de 2024 - BANCO DO BRASIL" in result.output
    assert "APLICAÇÃO FINANCEIRA - BANCO DO BRASIL - APLICACAO CDB - 01/2024" in result.output
    assert "RENDIMENTO DE RESGATE DE APLICAÇÃO FINANCEIRA" in result.output
    assert "15/01/2024" in result.output
    assert "807" in result.output


def test_process_darf(cli_runner, temp_db, sample_profile, ofx_file):
    result = _process(
        cli_runner, temp_db, str(ofx_file), "--profile", sample_profile.id, "--view", "darf"
    )

    assert result.exit_code == 0
    assert "DARF - Janeiro de 2024" in result.output
    assert "TOTAL DARF" in result.output
    # Yield 50.00: IRPJ 7.50 + CSLL 4.50
    assert "R$ 12,00" in result.output


def test_process_export(cli_runner, temp_db, sample_profile, ofx_file, tmp_path):
    export_path = tmp_path / "darf.csv"

    result = _process(
        cli_runner,
        temp_db,
        str(ofx_file),
        "--profile",
        sample_profile.id,
        "--export",
        str(export_path),
    )

    assert result.exit_code == 0
    assert "Tax report written to" in result.output
    lines = export_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Data;Historico;Rendimento_Bruto;IRRF_Extrato;IRPJ_15;CSLL_9;DARF_Final"
    assert lines[1] == "15/01/2024;RESGATE CDB;50.00;0.00;7.50;4.50;12.00"
    assert len(lines) == 2


def test_process_unknown_profile(cli_runner, temp_db, ofx_file):
    result = _process(cli_runner, temp_db, str(ofx_file), "--profile", "Nope")

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "not found" in result.output


def test_process_pdf_without_api_key(cli_runner, temp_db, sample_profile, tmp_path, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    pdf = tmp_path / "dez.pdf"
    pdf.write_bytes(b"%PDF-1.4")

    result = _process(cli_runner, temp_db, str(pdf), "--profile", sample_profile.id)

    assert result.exit_code == 1
    assert "GEMINI_API_KEY" in result.output


def test_process_no_transactions(cli_runner, temp_db, sample_profile, tmp_path):
    empty = tmp_path / "empty.ofx"
    empty.write_text("<OFX></OFX>", encoding="utf-8")

    result = _process(cli_runner, temp_db, str(empty), "--profile", sample_profile.id)

    assert result.exit_code == 1
    assert "No yield or movement entries" in result.output


def test_process_requires_files(cli_runner, temp_db, sample_profile):
    result = _process(cli_runner, temp_db, "--profile", sample_profile.id)

    assert result.exit_code != 0
