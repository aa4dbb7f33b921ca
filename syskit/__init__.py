"""Systems-programming toolkit: pools, a reactor, TCP servers, file and JSON utilities, logging and ZeroMQ demos."""

__version__ = "0.1.0"