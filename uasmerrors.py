class AssembleError(Exception):
    ''' Base class for everything that stops an assembly run.
        `lineno`, `mnemonic` and `token` are filled in as the
        error travels up through the pipeline, whichever of them
        is known at the point it is raised. '''

    def __init__(self, message, lineno=None, mnemonic=None, token=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.mnemonic = mnemonic
        self.token = token

    def locate(self, lineno=None, mnemonic=None):
        # Only fill in what the raiser didn't know
        if self.lineno is None:
            self.lineno = lineno
        if self.mnemonic is None:
            self.mnemonic = mnemonic
        return self

    def __str__(self):
        return self.message

class UnknownInstruction(AssembleError):
    pass

class ArityMismatch(AssembleError):
    pass

class InvalidRegister(AssembleError):
    pass

class InvalidImmediate(AssembleError):
    pass

class InvalidImmediateFormat(InvalidImmediate):
    pass

class InvalidImmediateRange(InvalidImmediate):
    pass

class InvalidOperand(AssembleError):
    pass

class LineSyntaxError(AssembleError):
    pass

class MalformedWordLength(AssembleError):
    # Not a user error: an encoder produced a word of the wrong shape.
    pass
