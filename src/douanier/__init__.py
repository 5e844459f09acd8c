"""
Douanier - Payment-correlated Solana wallet authentication.

Clean Architecture service that binds a uniquely-amounted micro-payment
to an authentication session.
"""

__version__ = "0.1.0"
