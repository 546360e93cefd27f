"""
crossndk - build Cargo projects for Android with the NDK.

Locates an Android NDK, runs cargo once per Android ABI with the NDK's
compilers wired in, and collects the resulting shared libraries into a
jniLibs-style directory tree.
"""

__version__ = "0.1.0"
