""" influxrest - A client for the InfluxDB HTTP admin and data API """

__version__ = "0.1.0"

default_host = "localhost:8086"
default_username = "root"
default_password = "root"
default_database = ""


from .exceptions import InfluxDBError
from .exceptions import InfluxDBServerError
from .exceptions import InfluxDBDecodeError
from .series import Series
from .series import TimePrecision
from .influxrest import ClientConfig
from .influxrest import Client
