import functools

import click.testing
import pytest

from kubexample.cli import CLIControls, main


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def controls(connection_info):
    return CLIControls(connection_info=connection_info)


@pytest.fixture()
def invoke(runner, controls):
    return functools.partial(runner.invoke, main, obj=controls)


@pytest.fixture()
def real_run(mocker):
    return mocker.patch('kubexample._core.reactor.running.run')
