from toonlite.cli import run

run()
