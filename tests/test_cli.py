"""
Tests for CLI entry point - subprocess calls against the bundled catalog.
"""

import json
import os
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
CLI_SCRIPT = PROJECT_ROOT / 'cli.py'


def run_cli(*args, cwd=None):
    env = dict(os.environ)
    env.update({'SYNTHETIC_SEED': '11', 'SYNTHETIC_DAYS': '30', 'LOG_LEVEL': 'WARNING'})
    env.pop('DATASETS_CATALOG', None)
    return subprocess.run(
        [sys.executable, str(CLI_SCRIPT), *args],
        capture_output=True,
        text=True,
        cwd=cwd or PROJECT_ROOT,
        env=env,
        timeout=60
    )


@pytest.fixture
def payload_file():
    """Small uploaded dataset with known statistics."""
    payload = {
        'id': 'pier',
        'name': 'Pier gauge',
        'parameters': ['level', 'double'],
        'data': [
            {'date': f'2024-01-{day:02d}', 'level': float(day), 'double': float(2 * day)}
            for day in range(1, 11)
        ]
    }
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / 'pier.json'
        path.write_text(json.dumps(payload))
        yield path


class TestCLI:
    """End-to-end CLI commands."""

    def test_list(self):
        result = run_cli('list')

        assert result.returncode == 0, result.stderr
        ids = [d['id'] for d in json.loads(result.stdout)['datasets']]
        assert ids == ['marine_weather', 'chemical_oceanographic']

    def test_summary_with_range(self, payload_file):
        result = run_cli('--payload', str(payload_file), 'summary', 'pier',
                         '--param', 'level', '--from', '2024-01-03', '--to', '2024-01-05')

        assert result.returncode == 0, result.stderr
        output = json.loads(result.stdout)
        assert output['summary']['count'] == 3
        assert output['summary']['mean'] == 4.0
        assert output['insight'].startswith('Parameter level: mean=4.000')

    def test_trends(self, payload_file):
        result = run_cli('--payload', str(payload_file), 'trends', 'pier',
                         '--param', 'level', '--window', '3', '--to', '2024-01-07')

        assert result.returncode == 0, result.stderr
        averages = [p['moving_average'] for p in json.loads(result.stdout)['data']]
        assert averages == [1.0, 1.5, 2.0, 3.0, 4.0, 5.0, 6.0]

    def test_correlation(self, payload_file):
        result = run_cli('--payload', str(payload_file), 'correlation', 'pier',
                         '--param1', 'level', '--param2', 'double')

        assert result.returncode == 0, result.stderr
        output = json.loads(result.stdout)
        assert output['r'] == 1.0
        assert output['interpretation'] == 'Strong positive correlation'

    def test_export_to_file(self, payload_file):
        output_path = payload_file.parent / 'out.csv'
        result = run_cli('--payload', str(payload_file), 'export', 'pier',
                         '--param', 'level', '--output', str(output_path))

        assert result.returncode == 0, result.stderr
        lines = output_path.read_text().splitlines()
        assert lines[0] == 'date,level'
        assert lines[1] == '2024-01-01,1.0'
        assert len(lines) == 11

    def test_unknown_dataset(self):
        result = run_cli('summary', 'nope', '--param', 'temperature')

        assert result.returncode == 1
        assert 'Dataset not found' in result.stderr

    def test_unknown_parameter(self):
        result = run_cli('summary', 'marine_weather', '--param', 'salinity')

        assert result.returncode == 1
        assert 'Parameter salinity not available' in result.stderr

    def test_invalid_payload(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / 'bad.json'
            path.write_text('{"id": "x"}')

            result = run_cli('--payload', str(path), 'list')

        assert result.returncode == 1
        assert 'Invalid payload' in result.stderr

    def test_missing_command(self):
        result = run_cli()

        assert result.returncode == 2
