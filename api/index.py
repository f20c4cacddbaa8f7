# api/index.py
# Serverless entrypoint: the store is built from env settings when the app starts.
from clipboard_store.api import create_app

app = create_app()
