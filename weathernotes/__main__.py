from weathernotes.cli import run

run()
