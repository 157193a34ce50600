"""Prompts for the freeform essay written at a single level."""

from simple_explain.schemas.lesson import EssayLevel

level_instructions: dict[str, dict[EssayLevel, str]] = {
    "en": {
        EssayLevel.BEGINNER: (
            "Use very simple language, avoid jargon, and focus on core ideas "
            "with intuitive examples."
        ),
        EssayLevel.INTERMEDIATE: (
            "Use a balanced style with moderate technical detail, clear term "
            "definitions, and practical examples."
        ),
        EssayLevel.ADVANCED: (
            "Use precise technical language with deeper mechanisms, nuanced "
            "distinctions, limitations, and tradeoffs."
        ),
    },
    "vi": {
        EssayLevel.BEGINNER: (
            "Dùng ngôn ngữ rất đơn giản, ưu tiên trực quan, hạn chế thuật ngữ, "
            "tập trung ý chính."
        ),
        EssayLevel.INTERMEDIATE: (
            "Giải thích cân bằng giữa dễ hiểu và chính xác, dùng một số thuật "
            "ngữ và ví dụ thực tế."
        ),
        EssayLevel.ADVANCED: (
            "Giải thích chuyên sâu với thuật ngữ chính xác, cơ chế chi tiết, "
            "sắc thái, giới hạn và đánh đổi."
        ),
    },
}

user_prompts = {
    "en": """Write a short essay around 500 words explaining "{topic}".
Follow this level instruction:
* Level: {level_instruction}
Structure the essay so that each paragraph builds logically on the previous one.
* The first paragraph should introduce the most basic and foundational idea.
* Each following paragraph should gradually add slightly more depth and complexity.
* Move step by step from simple concepts to more abstract or advanced ones.
Use examples when helpful, and define important terms at a level suitable for the selected profile.
Write in plain text only. Do not use any markdown formatting (no headers, bold, italic, bullet points, or numbered lists). Use only paragraphs separated by blank lines.""",
    "vi": """Viết một bài luận ngắn khoảng 500 từ giải thích "{topic}".
Tuân theo mức độ giải thích sau:
* Mức độ: {level_instruction}
Cấu trúc bài luận sao cho mỗi đoạn văn xây dựng logic trên đoạn trước.
* Đoạn đầu tiên nên giới thiệu ý tưởng cơ bản và nền tảng nhất.
* Mỗi đoạn tiếp theo dần dần thêm chiều sâu và độ phức tạp.
* Di chuyển từng bước từ khái niệm đơn giản đến trừu tượng hoặc nâng cao hơn.
Sử dụng ví dụ khi cần và giải thích thuật ngữ theo đúng mức cấu hình đã chọn.
Viết bằng tiếng Việt. Chỉ viết văn bản thuần túy. Không sử dụng định dạng markdown (không tiêu đề, in đậm, in nghiêng, gạch đầu dòng, hoặc danh sách đánh số). Chỉ sử dụng các đoạn văn cách nhau bằng dòng trống.""",
}
