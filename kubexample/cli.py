import dataclasses
import functools
from typing import IO, Any, Callable

import click

from kubexample._cogs.configs import configuration
from kubexample._cogs.helpers import versions
from kubexample._cogs.structs import credentials, workloads
from kubexample._core.actions import loggers
from kubexample._core.reactor import commands, running


@dataclasses.dataclass()
class CLIControls:
    """ Controls of the embedding code & tests, which are impossible to pass via CLI. """
    settings: configuration.Settings = dataclasses.field(default_factory=configuration.Settings)
    connection_info: credentials.ConnectionInfo | None = None


class CommandFailure(click.ClickException):
    """ A fixed diagnostic and the underlying error, both on stderr. """

    def __init__(self, failed: running.CommandFailed) -> None:
        super().__init__(failed.message)
        self.reason = failed.reason

    def show(self, file: IO[Any] | None = None) -> None:
        click.echo(self.message, err=True)
        click.echo(self.reason, err=True)


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        if isinstance(value, loggers.LogFormat):
            return value
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='plain')
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.PLAIN,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet, log_format=log_format)
        return fn(*args, **kwargs)

    return wrapper


pass_controls = click.make_pass_decorator(CLIControls, ensure=True)


def run_command(controls: CLIControls, command: Callable[..., Any], *, failure: str, **kwargs: Any) -> None:
    try:
        running.run(
            functools.partial(command, settings=controls.settings, **kwargs),
            failure=failure,
            connection_info=controls.connection_info,
        )
    except running.CommandFailed as e:
        raise CommandFailure(e) from e


@click.version_option(versions.version or 'unknown', prog_name='kubectl-example')
@click.group(name='example', invoke_without_command=True, context_settings=dict(
    auto_envvar_prefix='KUBEXAMPLE',
    help_option_names=['-h', '--help'],
))
@click.option('--request-timeout', type=float, default=None,
              help="Timeout of the whole API request, in seconds.")
@click.option('--connect-timeout', type=float, default=None,
              help="Timeout of connecting to the API server, in seconds.")
@click.pass_context
def main(ctx: click.Context, request_timeout: float | None, connect_timeout: float | None) -> None:
    """ An example kubectl plugin. """
    controls = ctx.ensure_object(CLIControls)
    if request_timeout is not None:
        controls.settings.networking.request_timeout = request_timeout
    if connect_timeout is not None:
        controls.settings.networking.connect_timeout = connect_timeout
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.group()
def pod() -> None:
    """ Programmatically accesses pods in a k8s with 'add', 'list' and 'list2'. """


@pod.command()
@logging_options
@click.option('-i', '--image', default=workloads.DEFAULT_IMAGE, show_default=True,
              help="image to use for pod")
@click.option('-n', '--namespace', default=workloads.DEFAULT_NAMESPACE, show_default=True,
              help="namespace to use for pod")
@click.argument('name')
@pass_controls
def add(__controls: CLIControls, name: str, image: str, namespace: str) -> None:
    """ Adds a pod to a k8s cluster. """
    request = workloads.PodRequest(name=name, image=image, namespace=namespace)
    run_command(__controls, commands.add_pod, failure="unable to create pod", request=request)


@pod.command(name='list')
@logging_options
@pass_controls
def list_(__controls: CLIControls) -> None:
    """ Lists pods in all namespaces of the cluster. """
    run_command(__controls, commands.list_pods, failure="unable to get pod list", namespace=None)


@pod.command()
@logging_options
@click.option('-n', '--namespace', default=workloads.DEFAULT_NAMESPACE, show_default=True,
              help="namespace to use for getting pods")
@pass_controls
def list2(__controls: CLIControls, namespace: str) -> None:
    """ Lists pods in one namespace of the cluster. """
    run_command(__controls, commands.list_pods, failure="unable to get pod list", namespace=namespace)


@main.command()
@logging_options
@pass_controls
def resources(__controls: CLIControls) -> None:
    """ Lists resources in the k8s cluster. """
    run_command(__controls, commands.list_resources, failure="unable to get resource list")
