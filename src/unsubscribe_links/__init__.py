"""
Unsubscribe link extraction for email messages.

Finds the unsubscribe actions (send an email or open a link) offered by
a message's List-Unsubscribe header and HTML body.
"""

__version__ = '0.1.0'
