"""CLI entrypoint: Typer app definition and command registration"""

import typer

from qmdrender.cli.commands import meta_cmd, render_cmd


app = typer.Typer(name="qmdrender", no_args_is_help=True, help="Render QMD documents to HTML")

app.command(name="render")(render_cmd)
app.command(name="meta")(meta_cmd)
