"""CLI entrypoint: Typer app definition and command registration"""

import typer

from surfdoc.cli.commands import check_cmd, fmt_cmd, parse_cmd, root_cmd, types_cmd


app = typer.Typer(name="surfdoc", no_args_is_help=True, help="SurfDoc parser, checker, and formatter")

app.callback()(root_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="check")(check_cmd)
app.command(name="fmt")(fmt_cmd)
app.command(name="types")(types_cmd)
