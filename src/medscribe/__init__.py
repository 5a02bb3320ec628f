"""
MedScribe: AI-assisted medical scribe service

Records clinician-patient conversations with continuous speech-to-text and
turns the transcript into structured medical notes with a large language
model, optionally enriched with locally stored patient history.
"""

__version__ = "0.1.0"
__author__ = "MedScribe Team"
__description__ = "AI-assisted medical scribe service"
