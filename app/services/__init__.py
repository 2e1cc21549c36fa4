"""Scheduling core services"""
