"""Core domain layer for mtpfs"""
