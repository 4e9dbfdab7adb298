"""Tests for the command line entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from fossa_bulk_import import main

REQUIRED = ['--org', 'acme', '--token', 'ghp_abc123', '--session', 'sid-value',
            '--filter-value', '12345']


@pytest.mark.parametrize('code', [0, 1, 32, 130])
@patch('fossa_bulk_import.ImportOrchestrator')
def test_main_exits_with_orchestrator_code(mock_orchestrator: MagicMock, code: int) -> None:
    mock_orchestrator.return_value.run.return_value = code

    with pytest.raises(SystemExit) as excinfo:
        main(REQUIRED)

    assert excinfo.value.code == code
    (cfg,) = mock_orchestrator.call_args.args
    assert cfg.github.org == 'acme'


@patch('fossa_bulk_import.ImportOrchestrator')
def test_main_invalid_config_exits_two(mock_orchestrator: MagicMock) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(REQUIRED + ['--batch-size', '0'])

    assert excinfo.value.code == 2
    mock_orchestrator.assert_not_called()
