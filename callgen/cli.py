# --coding:utf-8--
import click
from click_help_colors import HelpColorsGroup, version_option

from callgen import __version__, __image__
from callgen.log import CallGenLogger
from callgen.path import LOG_FILE_PATH
from callgen.maker.config import NAMING_STRATEGIES
from callgen.maker.cli_handlers import handle_gen
from callgen._printer import print_message


@click.group(cls=HelpColorsGroup,
             invoke_without_command=True,
             help_headers_color='magenta',
             help_options_color='cyan',
             context_settings={"max_content_width": 120, })
@version_option(version=__version__, prog_name="callgen", message_color="green")
@click.pass_context
def main(ctx):
    click.echo(__image__)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command(help="Generate typed call descriptions from yaml test do steps.")
@click.option("-s", "--spec", help="REST API spec json file or directory.")
@click.option("-t", "--tests", help="Yaml test file or directory.")
@click.option("-o", "--output", help="Write call descriptions to this json file.")
@click.option("-n", "--naming", default=None, type=click.Choice(list(NAMING_STRATEGIES.keys())),
              help="Naming strategy for generated type and variant names.")
@click.option("-cn", "--custom-naming", "custom_naming", default=None,
              help="Dotted path of a custom naming function, e.g. conf.naming.my_naming.")
@click.option("-w", "--workers", default=None, type=int, help="Number of threads generating concurrently.")
@click.option("--log_level", default="info",
              type=click.Choice(["trace", "debug", "info", "success", "warning", "error", "critical"]),
              help="Set running log level.")
@click.option("--log_file", is_flag=True, default=False, help="Also write debug logs to logs/callgen.log.")
@click.pass_context
def gen(ctx, spec, tests, output, naming, custom_naming, workers, log_level, log_file):
    if log_level != "info":
        print_message(f":wrench:切换日志等级：{log_level}")
        CallGenLogger.change_level(log_level)
    if log_file:
        CallGenLogger.file_handler(level="debug", log_file_path=LOG_FILE_PATH)

    exit_code = handle_gen(spec, tests, output, naming, custom_naming, workers)
    ctx.exit(exit_code)


if __name__ == '__main__':
    main()
