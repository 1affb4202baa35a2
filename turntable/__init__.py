"""turntable: a self-describing turntable resource driven by a finite state machine

The turntable has a closed set of five states and nine legal transitions.
Every representation of the resource lists the actions that are legal from
its current state, so clients discover what they may do next instead of
hard-coding it.

Responsibilities:
    - State space and transition table definition
    - Validation of the table (determinism, closure, reachability)
    - Serialized execution of actions and their side effects
    - Projection of the current state into links
    - HTTP binding of each action
"""

__version__ = "0.1.0"
