import enum

from .exceptions import InfluxDBDecodeError


class TimePrecision(str, enum.Enum):
    SECOND = "s"
    MILLISECOND = "m"
    MICROSECOND = "u"

    def __str__(self):
        return self.value


class Series:
    """A named time series: column names plus rows of points.

    Used as-is on the wire for writes and query results, the values are not
    interpreted.
    """

    def __init__(self, name, columns=None, points=None):
        self.name = name
        self.columns = list(columns) if columns else []
        self.points = [list(p) for p in points] if points else []

    def __repr__(self):
        return (
            f"Series(name={self.name!r}, columns={self.columns!r}, "
            f"points={self.points!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, Series):
            return NotImplemented
        return (self.name, self.columns, self.points) == (
            other.name,
            other.columns,
            other.points,
        )

    def to_dict(self):
        return {"name": self.name, "columns": self.columns, "points": self.points}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise InfluxDBDecodeError(
                f"Expected a series object, got {type(data).__name__}"
            )
        columns = data.get("columns")
        if columns is None:
            columns = []
        if not isinstance(columns, list) or not all(
            isinstance(c, str) for c in columns
        ):
            raise InfluxDBDecodeError("Series columns must be a list of strings")

        points = data.get("points")
        if points is None:
            points = []
        if not isinstance(points, list) or not all(
            isinstance(p, list) for p in points
        ):
            raise InfluxDBDecodeError("Series points must be a list of lists")

        return cls(data.get("name"), columns=columns, points=points)
