"""Mailing-list form handling for Django."""
