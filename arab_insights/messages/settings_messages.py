# arab_insights/messages/settings_messages.py

SETTINGS_FETCHED = "Inference settings fetched successfully."
SETTINGS_UPDATED = "Inference settings updated successfully."
SETTINGS_TEST_DONE = "Inference endpoint test finished."

ADMIN_KEY_INVALID = "Missing or invalid admin API key."
ADMIN_KEY_NOT_CONFIGURED = "Admin API key is not configured on the server."
ENDPOINT_NOT_HTTPS = "Inference endpoint must be an https:// URL."
TOKEN_FORMAT_INVALID = "Hugging Face tokens start with 'hf_'."
