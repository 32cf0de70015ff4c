"""
Domain exceptions.

Expected conditions are reported through ``Result`` objects; these
exceptions cross the persistence boundary only.
"""


class WeatherForecastError(Exception):
    """Base class for application errors."""


class UsernameAlreadyExistsError(WeatherForecastError):
    """Raised when inserting a user whose username is already taken."""

    def __init__(self, username: str):
        super().__init__(f"User with username '{username}' already exists.")
        self.username = username
