"""Localized interface strings for English and Vietnamese."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetaText:
    title: str
    description: str


@dataclass(frozen=True)
class HeaderText:
    logo: str
    tagline: str


@dataclass(frozen=True)
class InputText:
    heading: str
    subtitle: str
    placeholder: str
    generate_btn: str
    hint: str
    level_label: str
    beginner_level: str
    intermediate_level: str
    advanced_level: str


@dataclass(frozen=True)
class RecentText:
    heading: str
    export_btn: str
    empty: str


@dataclass(frozen=True)
class LoadingText:
    text: str


@dataclass(frozen=True)
class LessonText:
    beginner_label: str
    intermediate_label: str
    advance_label: str
    generated_on: str
    total_words: str
    words_suffix: str
    continue_to_next: str
    final_level: str


@dataclass(frozen=True)
class ArticleText:
    new_topic: str
    font_size_title: str
    print_title: str
    min_read: str
    footer: str
    title_prefix: str


@dataclass(frozen=True)
class Dictionary:
    meta: MetaText
    header: HeaderText
    input: InputText
    recent: RecentText
    loading: LoadingText
    lesson: LessonText
    article: ArticleText
    error_message: str
    date_locale: str
    month_names: tuple[str, ...]


EN = Dictionary(
    meta=MetaText(
        title="Simple Explain - Learn Anything Simply",
        description="Complex topics, explained simply",
    ),
    header=HeaderText(
        logo="📚 Simple Explain",
        tagline="Complex topics, explained simply",
    ),
    input=InputText(
        heading="What would you like to learn about?",
        subtitle="Enter any topic and get a clear, simple explanation",
        placeholder="e.g., Quantum Physics, Blockchain, Photosynthesis...",
        generate_btn="Generate Explanation",
        hint="Press Enter to generate a three-level lesson",
        level_label="Explanation level",
        beginner_level="Beginner",
        intermediate_level="Intermediate",
        advanced_level="Advanced",
    ),
    recent=RecentText(
        heading="Recent searches",
        export_btn="EXPORT",
        empty="No recent searches yet.",
    ),
    loading=LoadingText(text="Crafting your explanation..."),
    lesson=LessonText(
        beginner_label="Beginner",
        intermediate_label="Intermediate",
        advance_label="Advanced",
        generated_on="Generated on",
        total_words="Total",
        words_suffix="words",
        continue_to_next="Continue to",
        final_level="You have reached the final level.",
    ),
    article=ArticleText(
        new_topic="← New Topic",
        font_size_title="Adjust font size",
        print_title="Print article",
        min_read="min read",
        footer="Generated with ✨ by Simple Explain",
        title_prefix="Understanding",
    ),
    error_message="Failed to generate the explanation. Please try again.",
    date_locale="en-US",
    month_names=(
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
)

VI = Dictionary(
    meta=MetaText(
        title="Giải Thích Đơn Giản - Học Mọi Thứ Một Cách Đơn Giản",
        description="Chủ đề phức tạp, giải thích đơn giản",
    ),
    header=HeaderText(
        logo="📚 Giải Thích Đơn Giản",
        tagline="Chủ đề phức tạp, giải thích đơn giản",
    ),
    input=InputText(
        heading="Bạn muốn tìm hiểu về điều gì?",
        subtitle="Nhập bất kỳ chủ đề nào và nhận giải thích rõ ràng, đơn giản",
        placeholder="VD: Vật lý lượng tử, Blockchain, Quang hợp...",
        generate_btn="Tạo Giải Thích",
        hint="Nhấn Enter để tạo bài học ba cấp độ",
        level_label="Mức độ giải thích",
        beginner_level="Cơ bản",
        intermediate_level="Trung cấp",
        advanced_level="Nâng cao",
    ),
    recent=RecentText(
        heading="Tìm kiếm gần đây",
        export_btn="EXPORT",
        empty="Chưa có tìm kiếm gần đây.",
    ),
    loading=LoadingText(text="Đang soạn giải thích cho bạn..."),
    lesson=LessonText(
        beginner_label="Cơ bản",
        intermediate_label="Trung cấp",
        advance_label="Nâng cao",
        generated_on="Ngày tạo",
        total_words="Tổng",
        words_suffix="từ",
        continue_to_next="Tiếp tục với",
        final_level="Bạn đã hoàn thành cấp độ cuối cùng.",
    ),
    article=ArticleText(
        new_topic="← Chủ Đề Mới",
        font_size_title="Điều chỉnh cỡ chữ",
        print_title="In bài viết",
        min_read="phút đọc",
        footer="Được tạo bởi ✨ Giải Thích Đơn Giản",
        title_prefix="Tìm Hiểu Về",
    ),
    error_message="Không thể tạo giải thích. Vui lòng thử lại.",
    date_locale="vi-VN",
    month_names=tuple(f"tháng {n}" for n in range(1, 13)),
)

DICTIONARIES: dict[str, Dictionary] = {"en": EN, "vi": VI}
LOCALES: tuple[str, ...] = tuple(DICTIONARIES)


def get_dictionary(lang: str | None) -> Dictionary:
    """Return the dictionary for ``lang``, falling back to English."""
    return DICTIONARIES.get(lang or "", EN)
