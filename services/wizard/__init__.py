# -*- coding: utf-8 -*-
"""Intake wizard engine: step catalog, form state, error state, submission."""
