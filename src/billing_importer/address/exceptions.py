"""Address resolution errors. Each one is fatal for the row that raised it."""


class AddressError(Exception):
    """Base exception for addresses that cannot be submitted."""
    pass


class InvalidCountryError(AddressError):
    def __init__(self, country: str):
        self.country = country
        super().__init__(f"{country} is not a valid country.")


class InvalidSubdivisionError(AddressError):
    def __init__(self, state: str, country: str):
        self.state = state
        self.country = country
        super().__init__(f"{state} is not a valid subdivision for {country}.")


class CountyRequiredError(AddressError):
    def __init__(self, country: str):
        self.country = country
        super().__init__(f"The address failed to validate, and a county is required for addresses in {country}.")


class InvalidCountyError(AddressError):
    def __init__(self, county: str, state: str):
        self.county = county
        self.state = state
        super().__init__(f"{county} is not a valid county for the state {state}.")


class MissingFieldError(AddressError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"This address is missing the {field}.")
