"""MwanAfrika: gamified learning backend for African students."""
