"""monadbank - wallet connection and contract forms for the accounts contract."""

__version__ = "0.1.0"
