"""CIP message encodings, connection parameters and object models for EtherNet/IP scanners."""

__version__ = "0.1.0"