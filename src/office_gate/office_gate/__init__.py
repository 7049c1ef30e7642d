"""Office Gate package.

Network admission control for attendance check-in/check-out, organized by
feature modules (network, settings, passes, gate) with a thin Flask controller
layer over plain service/repository classes.
"""
