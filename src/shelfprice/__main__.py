from shelfprice.cli.app import run

run()
