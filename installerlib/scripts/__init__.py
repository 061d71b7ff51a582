"""
Console entry points, generated from functions decorated with `utils.entrypoint`.
"""
