"""
Sink for the non-fatal messages produced while decoding a saved game.

The handle is passed explicitly to whoever needs to report something, so
two containers never share the same list of messages.

Only the last MAX_MESSAGES messages are kept, count is the total since the
last clear().
"""
import logging
from collections import deque
from typing import Deque, List, Tuple


MAX_MESSAGES = 1000


class Diagnostics(object):

    def __init__(self, logger=None, max_messages=MAX_MESSAGES):
        self.logger = logger or logging.getLogger(__name__)
        self.messages: Deque[Tuple[str, bool]] = deque(maxlen=max_messages)
        self.count = 0

    def __call__(self, message: str, is_warning: bool = False) -> None:
        self.messages.append((message, is_warning))
        self.count += 1
        self.logger.log(logging.WARNING if is_warning else logging.INFO, message)

    def __repr__(self):
        return '<%s(%d messages)>' % (self.__class__.__name__, self.count)

    @property
    def warnings(self) -> List[str]:
        return [message for message, is_warning in self.messages if is_warning]

    def clear(self):
        self.messages.clear()
        self.count = 0
        self.logger.debug('diagnostics cleared')
