from .webhook import VoteServer, create_app
