"""cff-core CLI for checking citation files."""
import typer

from . import general

app = typer.Typer()
app.command("check")(general.check)
app.command("info")(general.info)
