"""Brokers package initialization."""

# Import all brokers for easy access
from .callable import *
from .https import *
from .scheduled import *
