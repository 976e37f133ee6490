"""
Accounts Domain

Profile and appearance preferences of the current account, and the
directory of professionals clients can book with. Accounts themselves are
issued by the identity provider; nothing here registers new ones.
"""
