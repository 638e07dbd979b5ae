class InfluxDBError(Exception):
    """Base class for errors raised by the client itself."""


class InfluxDBServerError(InfluxDBError, ConnectionError):
    """The server answered with a status outside [200, 300)."""

    def __init__(self, status_code, body):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server returned ({status_code}): {body}")


class InfluxDBDecodeError(InfluxDBError, ValueError):
    """The response was valid JSON but not of the expected shape."""
