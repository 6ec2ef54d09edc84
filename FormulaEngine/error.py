


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class ParseError(MathError):
    def __init__(self, message, code="3100", position=0, equation=None):
        super().__init__(message, code=code, equation=equation)
        self.position = position

    def __str__(self):
        return f"{self.message} at position {self.position}"

class CalculationError(MathError):
    pass

class ConfigurationError(MathError):
    pass










Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Formula Error",
    "4" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Subcategory (1 = syntax, 2 = resources)
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Missing Files: ", # + file names

    "3100" : "Unexpected character",
    "3101" : "Expected ')'",
    "3102" : "Expected ')' after function argument",
    "3103" : "Expected closing '|'",
    "3104" : "Unknown identifier",
    "3105" : "Unexpected end of input",
    "3106" : "Expression too deeply nested",
    "3200" : "Out of memory",

    "4000" : "Syntax error",
    "4001" : "Error",
    "4002" : "Function list is full",
    "4003" : "Clipboard unavailable",
    "4004" : "No such entry",
    "4005" : "Vector format: x,y,z (e.g. 1,2,3)",
    "4006" : "Vector list is full",

    "5000" : "Invalid setting: ", # + key
    "5001" : "Not all Settings could be saved: ", # + path


    "9999" : "Unexpected Error: " #+error
}


def describe(code):
    """Return the message registered for an error code (falls back to 9999)."""
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES["9999"])
