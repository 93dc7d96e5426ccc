from pkgchain.main import cli

cli()
