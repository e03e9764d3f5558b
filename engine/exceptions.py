# engine/exceptions.py

class AnalysisError(Exception):
    pass


class EmptyInputError(AnalysisError):
    pass


class InsufficientDataError(AnalysisError):
    pass


class InvalidInputError(AnalysisError):
    pass
