from http.server import BaseHTTPRequestHandler
from urllib.parse import urlsplit


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        # keep the query so /?username=x lands on the card
        query = urlsplit(self.path).query
        self.send_response(302)
        self.send_header("Location", f"/api/?{query}" if query else "/api/")
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
