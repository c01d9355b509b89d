from dieroll.main import run

run()
