# api/index.py

from http.server import BaseHTTPRequestHandler

from trophy_cards.config import Settings
from trophy_cards.pipeline import get_app
from trophy_cards.server import configure_logging, respond

configure_logging(Settings.from_env().log_level)


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond(self, get_app())

    def do_HEAD(self):
        respond(self, get_app())
