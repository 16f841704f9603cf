"""
License Shop Service Django project.
"""
