VERSION = "0.1.0"

SYSTEM_PROMPT = (
    "You are an AI assistant for n8n, a workflow automation platform. "
    "Help users with their workflow automation questions and provide accurate, helpful responses."
)

NO_RESPONSE_ANSWER = "No response generated"
