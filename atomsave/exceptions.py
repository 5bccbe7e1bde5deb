class AtomSaveException(Exception):
    '''Base class to extend in order to throw exception in atomsave.

    It takes the message and, optionally, the offset into the buffer where
    the problem was detected.
    '''

    def __init__(self, message, offset=None):
        self.message = message
        self.offset = offset
        super().__init__(message)

    def __str__(self):
        if self.offset is None:
            return self.message

        return f'{self.message} (at offset 0x{self.offset:x})'


class MalformedTextException(AtomSaveException):
    '''A multi-byte sequence in a payload is not valid for the text codec.'''
    pass


class StringTooLongException(AtomSaveException):
    '''The declared length of a name is over the 4096 code units limit.'''
    pass


class TruncatedContainerException(AtomSaveException):
    '''The buffer ends before the declared data.'''
    pass


class RecordNotFoundException(AtomSaveException, KeyError):

    def __init__(self, name):
        self.name = name
        super().__init__(f'record \'{name}\' not found in index')


class InvalidJsonException(AtomSaveException, ValueError):
    pass


class PropertyPathException(AtomSaveException, KeyError):

    def __init__(self, path, component):
        self.path = path
        self.component = component
        super().__init__(f'no property \'{component}\' while resolving \'{path}\'')


class CompressionException(AtomSaveException):
    pass
