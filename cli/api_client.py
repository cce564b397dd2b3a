"""REST API client for dictee server."""

import requests


class DicteeAPIClient:
    """Client for communicating with the dictee REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_lists(self) -> dict:
        """Get all word list names."""
        return self._get("/api/lists")

    def get_status(self) -> dict:
        """Get the current round and overall score."""
        return self._get("/api/status")

    def start_round(self, list_name: str | None = None, question_count: int | None = None,
                    until_all_correct: bool = False) -> dict:
        return self._post("/api/round/start", {
            'list_name': list_name,
            'question_count': question_count,
            'until_all_correct': until_all_correct
        })

    def submit(self, attempt: str) -> dict:
        """Submit a typed attempt for the current word."""
        return self._post("/api/round/submit", {'attempt': attempt})

    def next_round(self) -> dict:
        return self._post("/api/round/next")

    def replay(self) -> dict:
        return self._post("/api/round/replay")

    def reset(self) -> dict:
        return self._post("/api/round/reset")


def error_detail(error: Exception) -> str:
    """Best human-readable message for a failed request."""
    if isinstance(error, requests.HTTPError) and error.response is not None:
        try:
            return error.response.json().get('detail', str(error))
        except ValueError:
            return str(error)
    return str(error)
