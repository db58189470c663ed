class FLError(Exception): ...


class StatsError(FLError): ...


class RegressionError(FLError): ...


class ForecastError(FLError): ...


class ComparisonError(FLError): ...


def require(condition: bool, message: str, exc: type[FLError] = FLError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
