"""Career Quest — a staged career-simulation conversation.

The library side of the app: domain models, collaborator clients, session
state and the turn pipeline. The FastAPI layer lives in `backend/`.
"""
