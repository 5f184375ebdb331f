from resellerhub import create_app

app = create_app()
