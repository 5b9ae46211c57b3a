"""
CHIP-8 インタプリタパッケージ。
"""
__version__ = "0.1.0"
