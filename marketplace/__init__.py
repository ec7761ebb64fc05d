"""
Marketplace backend - order-to-hire lifecycle, proposals, credits and chat.
"""
