from app.fairgroup import create_app

app = create_app()
