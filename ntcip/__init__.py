"""NTCIP 1203 Dynamic Message Sign dialogs for a management station.
"""
