import pytest


def test_help_in_root(invoke, fake_api):
    result = invoke(['--help'])

    assert result.exit_code == 0
    assert 'Usage: example [OPTIONS] COMMAND' in result.stdout
    assert '  pod ' in result.stdout
    assert '  resources ' in result.stdout
    assert not fake_api.requests


def test_usage_without_commands(invoke, real_run, fake_api):
    result = invoke([])

    assert result.exit_code == 0
    assert 'Usage: example [OPTIONS] COMMAND' in result.stdout
    assert not real_run.called
    assert not fake_api.requests


@pytest.mark.parametrize('flag', ['--help', '-h'])
@pytest.mark.parametrize('args, usage', [
    (['pod'], 'Usage: example pod [OPTIONS] COMMAND'),
    (['pod', 'add'], 'Usage: example pod add [OPTIONS] NAME'),
    (['pod', 'list'], 'Usage: example pod list [OPTIONS]'),
    (['pod', 'list2'], 'Usage: example pod list2 [OPTIONS]'),
    (['resources'], 'Usage: example resources [OPTIONS]'),
])
def test_help_in_subcommands(invoke, real_run, fake_api, args, usage, flag):
    result = invoke(args + [flag])

    assert result.exit_code == 0
    assert usage in result.stdout
    assert not real_run.called
    assert not fake_api.requests


def test_help_shows_the_defaults(invoke):
    result = invoke(['pod', 'add', '--help'])

    assert result.exit_code == 0
    assert '-i, --image' in result.stdout
    assert '-n, --namespace' in result.stdout
    assert 'nginx' in result.stdout
    assert 'default' in result.stdout


def test_unknown_command_is_a_usage_error(invoke, real_run, fake_api):
    result = invoke(['deployment', 'list'])

    assert result.exit_code == 2
    assert 'No such command' in result.stderr
    assert not real_run.called
    assert not fake_api.requests


def test_missing_pod_name_is_a_usage_error(invoke, real_run, fake_api):
    result = invoke(['pod', 'add'])

    assert result.exit_code == 2
    assert "Missing argument 'NAME'" in result.stderr
    assert not real_run.called
    assert not fake_api.requests


def test_version(invoke, real_run, fake_api):
    result = invoke(['--version'])

    assert result.exit_code == 0
    assert result.stdout.startswith('kubectl-example, version ')
    assert not real_run.called
    assert not fake_api.requests
