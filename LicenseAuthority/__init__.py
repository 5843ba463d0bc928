"""
License Authority Django project.
"""
