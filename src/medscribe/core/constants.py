"""
Shared constants for MedScribe application.
"""

# Document store keys (kept compatible with the browser edition's localStorage keys)
PATIENTS_DOCUMENT_KEY = "medicalScribePatients"
PREFERENCES_DOCUMENT_KEY = "medicalScribePreferences"
API_SETTINGS_DOCUMENT_KEY = "medicalScribeApiSettings"

DOCUMENT_KEYS = [
    PATIENTS_DOCUMENT_KEY,
    PREFERENCES_DOCUMENT_KEY,
    API_SETTINGS_DOCUMENT_KEY,
]

# Session status messages shown to the clinician
STATUS_READY = "Ready to record"
STATUS_READY_UNCONFIGURED = "Ready to record - Configure API settings first"
STATUS_STORAGE_UNAVAILABLE = "⚠️ Storage unavailable - changes will only be kept until restart"

# Recording
STATUS_SPEECH_NOT_CONFIGURED = "❌ Please configure Azure Speech settings first (click 🔧 API Settings)"
STATUS_REQUESTING_MICROPHONE = "🔧 Requesting microphone access..."
STATUS_MICROPHONE_DENIED = "❌ Microphone permission denied. Please allow microphone access."
STATUS_RECORDING = "🔴 Recording... Speak now"
STATUS_SESSION_ENDED = "✅ Recording session ended"
STATUS_RECORDING_COMPLETE = "✅ Recording complete"
STATUS_STOPPED_WITH_ERROR = "⚠️ Recording stopped with error"
STATUS_INVALID_SPEECH_KEY = "❌ Invalid Speech key. Check your Azure Speech Service key in API Settings."
STATUS_SPEECH_QUOTA_OR_REGION = "❌ Speech service quota exceeded or region mismatch. Check API Settings."
STATUS_RECORDING_FAILED = "❌ Recording failed: {error}"
STATUS_SETUP_FAILED = "❌ Setup failed: {error}"

# Note generation
STATUS_NO_TRANSCRIPT = "❌ No transcript available. Please record first."
STATUS_COMPLETION_NOT_CONFIGURED = "❌ Please configure Azure OpenAI settings first (click 🔧 API Settings)"
STATUS_GENERATING = "🤖 AI generating medical notes..."
STATUS_NOTES_GENERATED = "✅ Medical notes generated successfully"
STATUS_COMPLETION_AUTH_FAILED = "❌ OpenAI authentication failed. Check your API key in settings."
STATUS_COMPLETION_DEPLOYMENT_NOT_FOUND = "❌ OpenAI deployment not found. Check your deployment name in settings."
STATUS_COMPLETION_RATE_LIMITED = "❌ OpenAI rate limit exceeded. Wait a moment and try again."
STATUS_COMPLETION_FAILED = "❌ Failed to generate notes: {error}"
NOTES_ERROR_PLACEHOLDER = "[Medical notes could not be generated. {status}]"

# Patients and visits
STATUS_SAVE_VISIT_PRECONDITION = "❌ Please select a patient and generate notes first"
STATUS_VISIT_SAVED = "✅ Visit notes saved to patient record"
STATUS_PATIENT_ADDED = "✅ Patient {name} added successfully"
STATUS_PATIENT_SELECTED = "📋 Selected patient: {name}"
STATUS_PATIENT_DESELECTED = "Patient selection cleared"
PATIENT_NAME_REQUIRED = "Patient name is required"

# Settings and preferences
STATUS_API_SETTINGS_SAVED = "✅ API settings saved successfully - Ready to record"
STATUS_PREFERENCES_SAVED = "✅ AI preferences saved"
