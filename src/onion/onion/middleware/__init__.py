# ABOUTME: Built-in middleware package
# ABOUTME: Exports the response finalizer installed in front of every application pipeline

from .respond import ResponseFinalizer, respond, encode_json, POWERED_BY

__all__ = ["ResponseFinalizer", "respond", "encode_json", "POWERED_BY"]
