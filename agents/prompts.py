# agents/prompts.py
from langchain_core.prompts import PromptTemplate

TASK_EXTRACTION_PROMPT = PromptTemplate.from_template(
    """You are an AI assistant that extracts actionable tasks from meeting transcripts.

Analyze the following meeting transcript and extract clear, actionable tasks.

For each task, provide:
1. A clear, concise title (max 60 characters)
2. A brief description of what needs to be done
3. Priority level based on urgency and importance
4. Relevant tags for categorization

Format your response as a JSON array of tasks:
[
  {{
    "title": "Task title",
    "description": "Detailed description",
    "priority": "MEDIUM",
    "tags": ["tag1", "tag2"]
  }}
]

Priority Guidelines:
- URGENT: Immediate action required, blocking others, critical deadlines (today/tomorrow)
- HIGH: Important with near-term deadlines (this week), significant impact
- MEDIUM: Standard priority, reasonable timeframes (1-2 weeks), moderate impact
- LOW: Nice-to-have, no strict deadline, minimal immediate impact

Tag Guidelines:
- Extract relevant keywords from context (e.g., "meeting", "review", "proposal", "budget", "design")
- Include department/team names if mentioned
- Add deadline-related tags ("urgent", "weekly", "followup")
- Maximum 3 tags per task

Important guidelines:
- Only extract tasks that are explicitly mentioned or clearly implied as action items
- Make titles specific and actionable (start with verbs like "Review", "Send", "Schedule", etc.)
- Include deadlines or timeframes in descriptions if mentioned
- Assign priority based on urgency keywords ("ASAP", "urgent", "critical") and deadlines
- Limit to maximum 10 tasks to avoid overwhelming users
- If no clear action items are found, return an empty array

Meeting Transcript:
{transcript}

Return only the JSON array, no additional text or explanation.
"""
)
