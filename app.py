from voozea import create_app

app = create_app()
