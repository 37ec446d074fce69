
import os
import sys
import subprocess

import pytest

ROOT = os.path.join(os.path.dirname(__file__), '..')


@pytest.mark.parametrize('module', [
    'votesim.evaluate',
    'votesim.evaluate.approval',
    'votesim.evaluate.cardinal',
    'votesim.evaluate.sequential',
    'votesim.system',
    'votesim.profile',
    'votesim.batch',
    'votesim.io.blt',
    'votesim.__main__',
])
def test_import_fresh(module):
    # each import runs in a new interpreter so that no module is preloaded
    completed = subprocess.run(
        [sys.executable, '-c', f'import {module}'],
        cwd=ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 0, completed.stderr


def test_main_list():
    completed = subprocess.run(
        [sys.executable, '-m', 'votesim', '--list'],
        cwd=ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 0, completed.stderr
    assert 'irv' in completed.stdout
