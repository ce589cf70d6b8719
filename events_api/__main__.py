"""``python -m events_api`` runs the API with uvicorn."""

from events_api.run import main

main()
