from shade.main import run

run()
