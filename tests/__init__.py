"""
End-to-end scenarios for the queen cell console API.
"""
