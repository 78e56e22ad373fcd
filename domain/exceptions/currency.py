class CurrencyException(Exception):
    pass


class ProviderError(CurrencyException):
    pass


class CurrencyNotFoundError(CurrencyException):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f'Currency {code} is not available in the current rate table')


class InvalidAmountError(CurrencyException):
    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f'Invalid amount: {amount!r}')


class DegenerateRateError(CurrencyException):
    def __init__(self, code: str, rate: object):
        self.code = code
        self.rate = rate
        super().__init__(f'Stored rate for {code} is unusable: {rate}')


class SnapshotUnavailableError(CurrencyException):
    pass
