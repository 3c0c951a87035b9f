from dotstrap.cli.main import app

app(prog_name="dotstrap")
