#!

"""State machine base class.

"""

from abc import abstractmethod

from . import logging

def label (text):
    "Decorator to attach a label to a state action method"
    def setlabel (f):
        f.label = text
        return f
    return setlabel

class StateMachine (object):
    """Abstract base class for a dialog state machine.

    The state machine is defined by a set of action methods, one per
    state.  An action carries out the requests for its step and
    returns the next state (another action method), or None when the
    dialog is finished.  Errors end the machine by raising an
    exception.

    There is one required action method, "s0", the initial state.
    The outcome of the dialog is left in attribute "result".
    """
    def __init__ (self):
        self.state = self.s0
        self.result = None

    @abstractmethod
    def s0 (self):
        """The initial state of the state machine.
        """
        pass

    def run (self):
        """Run the state machine from its current state until it is
        finished, and return the result.
        """
        while self.state:
            self.set_state (self.state ())
        return self.result

    def set_state (self, newstate, msg = ""):
        if msg:
            msg += ", "
        self.state = newstate
        if newstate:
            logging.trace ("{}new state {}", msg, self.statename ())
        else:
            logging.trace ("{}{} finished", msg, self.name)

    @property
    def name (self):
        return self.__class__.__name__

    def statename (self):
        """Return a string giving the object's name and the current
        state name.
        """
        if self.state:
            return "{}<state: {}>".format (self.name, self.state.__name__)
        return "{}<finished>".format (self.name)

    __str__ = statename

    def statelabel (self):
        """Return the label for the current state.  This is the "label"
        attribute of the state method, if it has one, otherwise the
        method name.
        """
        try:
            return self.state.label
        except AttributeError:
            return self.state.__name__
