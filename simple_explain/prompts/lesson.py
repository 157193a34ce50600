"""Prompts for the structured three-level lesson."""

SCHEMA_VERSION = "1.0"

system_prompt = """
You are Simple Explain, a patient teacher who turns complex topics into clear lessons.
You always answer with a single JSON object and nothing else.
"""

user_prompts = {
    "en": """
Explain "{topic}" as a lesson with three levels of depth.

Return a JSON object with exactly this shape:
{{
  "schema_version": "{schema_version}",
  "topic": "<the topic, cleaned up and capitalized>",
  "lesson": {{
    "beginner": "<text>",
    "intermediate": "<text>",
    "advance": "<text>"
  }}
}}

Requirements for each level:
* beginner: very simple language, no jargon, intuitive everyday examples, about 200 words.
* intermediate: balanced detail, define key terms, practical examples, about 250 words.
* advance: precise technical language, deeper mechanisms, nuances, limitations and tradeoffs, about 300 words.

Each level builds on the previous one. Write plain text only inside the strings, with no markdown.
Separate paragraphs with a blank line (\\n\\n).
""",
    "vi": """
Giải thích "{topic}" dưới dạng một bài học gồm ba cấp độ.

Trả về một đối tượng JSON có đúng cấu trúc sau:
{{
  "schema_version": "{schema_version}",
  "topic": "<chủ đề, viết gọn và viết hoa chữ cái đầu>",
  "lesson": {{
    "beginner": "<nội dung>",
    "intermediate": "<nội dung>",
    "advance": "<nội dung>"
  }}
}}

Yêu cầu cho từng cấp độ:
* beginner: ngôn ngữ rất đơn giản, hạn chế thuật ngữ, ví dụ trực quan đời thường, khoảng 200 từ.
* intermediate: cân bằng giữa dễ hiểu và chính xác, giải thích thuật ngữ chính, ví dụ thực tế, khoảng 250 từ.
* advance: thuật ngữ chính xác, cơ chế chi tiết, sắc thái, giới hạn và đánh đổi, khoảng 300 từ.

Mỗi cấp độ xây dựng trên cấp độ trước. Viết bằng tiếng Việt, chỉ dùng văn bản thuần túy trong các chuỗi, không dùng markdown.
Các đoạn văn cách nhau bằng một dòng trống (\\n\\n).
""",
}
