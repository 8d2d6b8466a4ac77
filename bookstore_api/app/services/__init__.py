"""
Service layer abstraction.

Services encapsulate the store calls behind each API operation so that
handlers stay free of driver details.
"""
