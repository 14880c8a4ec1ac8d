from linmaint.main import cli

cli()
