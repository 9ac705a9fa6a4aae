#!/usr/bin/env python3
"""
Regression test for codon-redundancy

Runs the command line tool with known inputs and checks that the output
matches expected results.
"""

import io
import json
import subprocess
import sys
from pathlib import Path

import pandas as pd
import pytest

REPO_ROOT = Path(__file__).parent


def run_command(args, cwd=REPO_ROOT):
    """Run the command line tool and return (returncode, stdout, stderr)"""
    result = subprocess.run(
        [sys.executable, '-m', 'codon_redundancy', *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        timeout=120,
    )
    return result.returncode, result.stdout, result.stderr


def read_tsv(text):
    return pd.read_csv(io.StringIO(text), sep='\t', index_col='codon')


def test_full_standard_table():
    returncode, stdout, stderr = run_command(['-t', 'standard'])
    assert returncode == 0, stderr

    table = read_tsv(stdout)
    assert len(table) == 64
    assert table.loc['TAA', 'amino_acid'] == '*'
    assert table.loc['CTC', 'third_four'] == pytest.approx(1.0)
    assert table.loc['ATG', 'l0'] == pytest.approx(3.0)

    sense = table[table['amino_acid'] != '*']
    totals = sense[['l0', 'l2s', 'l2v', 'l4']].sum(axis=1)
    assert totals.to_numpy() == pytest.approx(3.0, abs=1e-5)


def test_selected_codons_mitochondrial():
    returncode, stdout, stderr = run_command(['-t', '2', '-c', 'AGA', '-c', 'TGG'])
    assert returncode == 0, stderr

    table = read_tsv(stdout)
    assert list(table.index) == ['AGA', 'TGG']
    assert table.loc['AGA', 'l0'] == 0.0
    assert table.loc['TGG', 'third_2s'] == pytest.approx(1.0)


def test_output_file_and_preset(tmp_path):
    preset = tmp_path / 'preset.json'
    preset.write_text(json.dumps({'genetic_code': 2, 'float_format': '%.2f'}))
    output = tmp_path / 'table.tsv'
    logfile = tmp_path / 'run.log'

    returncode, stdout, stderr = run_command(
        ['--preset', str(preset), '-o', str(output), '--log', str(logfile), '-q'])
    assert returncode == 0, stderr
    assert stdout == ''
    assert output.exists()
    assert 'NCBI table 2' in logfile.read_text()

    lines = output.read_text().splitlines()
    assert lines[0].split('\t')[:2] == ['codon', 'amino_acid']
    cgg = next(line for line in lines if line.startswith('CGG\t')).split('\t')
    assert cgg[1] == 'R'
    assert '2.00' in cgg
    assert '1.00' in cgg


def test_command_line_overrides_preset(tmp_path):
    preset = tmp_path / 'preset.json'
    preset.write_text(json.dumps({'genetic_code': 2}))

    returncode, stdout, stderr = run_command(['--preset', str(preset), '-t', '1', '-c', 'AGA'])
    assert returncode == 0, stderr
    assert read_tsv(stdout).loc['AGA', 'l0'] == pytest.approx(1.0)


def test_invalid_codon():
    returncode, stdout, stderr = run_command(['-c', 'agc'])
    assert returncode == 1
    assert 'Invalid codon' in stderr
    assert stdout == ''


def test_unknown_genetic_code():
    returncode, _, stderr = run_command(['-t', 'klingon'])
    assert returncode == 1
    assert 'Invalid codon table name' in stderr


def test_bad_preset(tmp_path):
    preset = tmp_path / 'preset.json'
    preset.write_text('{"codon_table": "standard"}')
    returncode, _, stderr = run_command(['--preset', str(preset)])
    assert returncode == 1
    assert 'Unknown preset option' in stderr


def test_list_codes():
    returncode, stdout, stderr = run_command(['--list-codes'])
    assert returncode == 0, stderr
    lines = stdout.splitlines()
    assert lines[0].startswith('1\tStandard')
    assert any(line.startswith('2\tVertebrate Mitochondrial') for line in lines)


@pytest.mark.parametrize('preset_text', ['{"table_cache_size": null}', '{"float_format": 3}'])
def test_bad_preset_values(tmp_path, preset_text):
    preset = tmp_path / 'preset.json'
    preset.write_text(preset_text)
    returncode, stdout, stderr = run_command(['--preset', str(preset), '-c', 'AGA'])
    assert returncode == 1
    assert 'Traceback' not in stderr
    assert 'Error loading preset file' in stderr
    assert stdout == ''


def test_error_banner():
    _, _, stderr = run_command(['-c', 'AGN'])
    assert '*' * 70 in stderr
    assert "ERROR: Invalid codon: 'AGN'" in stderr
