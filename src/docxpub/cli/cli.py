"""CLI entrypoint: Typer app definition and command registration"""

import typer

from docxpub.cli.commands import blog_cmd, course_cmd, glossary_cmd


app = typer.Typer(name="docxpub", no_args_is_help=True, help="Word document to publishable HTML generator")

app.command(name="course")(course_cmd)
app.command(name="blog")(blog_cmd)
app.command(name="glossary")(glossary_cmd)
