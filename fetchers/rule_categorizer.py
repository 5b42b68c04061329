"""Rule-based topic categorization for hot-list headlines."""

import logging
from typing import Dict, List, Optional


# General hot-list categories, checked in declaration order
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    '科技': ['AI', '人工智能', '手机', '科技', '互联网', '程序员', '代码', '软件', '芯片', '5G', '技术', '数据', '算法', '模型'],
    '财经': ['股票', '房价', '经济', '投资', '理财', '基金', '楼市', '金融', '银行', '消费', '年终奖', '薪资'],
    '娱乐': ['明星', '电影', '电视剧', '综艺', '演唱会', '偶像', '视频', '热播', '票房', '游戏'],
    '社会': ['教育', '医疗', '政策', '改革', '就业', '考研', '高考', '退休', '养老', '环保'],
    '生活': ['美食', '旅游', '健身', '时尚', '健康', '宠物', '亲子', '情感', '心理'],
    '职场': ['职场', '工作', '办公', '创业', '晋升', '跳槽', '裁员', '招聘', '简历'],
}
DEFAULT_CATEGORY = '其他'

# Football categories; anything unmatched is treated as player news
FOOTBALL_CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    '转会': ['转会', '签约', '租借', '加盟', '官宣', '解约', '续约'],
    '比赛': ['进球', '比赛', '战胜', '大胜', '逆转', '绝杀', '首秀', '破门', '戴帽', '胜', '负', '平局'],
    '荣誉': ['冠军', '射手榜', '最佳', '金球', '夺冠', '奖杯'],
    '争议': ['红牌', 'VAR', '争议', '点球', '判罚', '越位', '裁判'],
}
FOOTBALL_DEFAULT_CATEGORY = '球员动态'

# Relevance filter for the football hot-list
FOOTBALL_KEYWORDS: List[str] = [
    # 运动
    '足球', '球员', '球队', '教练', '主帅',
    # 赛事
    '联赛', '欧冠', '世界杯', '欧洲杯', '亚洲杯', '美洲杯', '英超', '西甲', '德甲', '意甲', '法甲',
    '中超', '欧联杯', '足总杯', '国王杯', '亚冠', '世预赛',
    # 俱乐部
    '皇马', '巴萨', '曼联', '曼城', '利物浦', '切尔西', '阿森纳', '热刺', '拜仁', '多特', '国米',
    '米兰', 'AC米兰', '尤文', 'PSG', '巴黎圣日耳曼',
    # 球星
    '梅西', 'C罗', '姆巴佩', '哈兰德', '贝林厄姆', '维尼修斯', '莱万', '凯恩', '萨拉赫', '德布劳内',
    '本泽马', '武磊', '李刚仁',
    # 术语
    '进球', '助攻', '帽子戏法', '点球', '红牌', '黄牌', '转会', '签约', '租借', '解约', '续约',
    '冠军', '降级', '升级', '积分', '射手榜', 'VAR', '越位', '任意球', '角球',
    # 国家队
    '国足', '中国队', '阿根廷', '法国队', '英格兰', '德国队', '西班牙队', '巴西队',
]


class KeywordCategorizer:
    """Fast keyword categorization: first category with a substring hit wins."""

    def __init__(self, category_keywords: Optional[Dict[str, List[str]]] = None,
                 default_category: str = DEFAULT_CATEGORY):
        self.logger = logging.getLogger(__name__)
        self.category_keywords = dict(category_keywords if category_keywords is not None else CATEGORY_KEYWORDS)
        self.default_category = default_category
        # Lower-cased once so matching ignores case
        self._lowered = {
            category: [keyword.lower() for keyword in keywords]
            for category, keywords in self.category_keywords.items()
        }

    @property
    def categories(self) -> List[str]:
        """All labels this categorizer can return, default last."""
        labels = list(self.category_keywords)
        if self.default_category not in labels:
            labels.append(self.default_category)
        return labels

    def categorize(self, title: str) -> str:
        """Return the category for *title*, or the default when nothing matches."""
        title_lower = (title or '').lower()
        for category, keywords in self._lowered.items():
            if any(keyword in title_lower for keyword in keywords):
                return category
        self.logger.debug(f"No keyword match for '{title}', using {self.default_category}")
        return self.default_category

    def match_keywords(self, title: str) -> List[str]:
        """Return every table keyword found in *title*, in table order."""
        title_lower = (title or '').lower()
        matched: List[str] = []
        for category, keywords in self.category_keywords.items():
            for keyword, keyword_lower in zip(keywords, self._lowered[category]):
                if keyword_lower in title_lower and keyword not in matched:
                    matched.append(keyword)
        return matched


def general_categorizer() -> KeywordCategorizer:
    """Categorizer for the general hot-list (default '其他')."""
    return KeywordCategorizer(CATEGORY_KEYWORDS, DEFAULT_CATEGORY)


def football_categorizer() -> KeywordCategorizer:
    """Categorizer for football headlines (default '球员动态')."""
    return KeywordCategorizer(FOOTBALL_CATEGORY_KEYWORDS, FOOTBALL_DEFAULT_CATEGORY)


def is_football_related(title: str) -> bool:
    """Check whether a headline mentions any football keyword."""
    title_lower = (title or '').lower()
    return any(keyword.lower() in title_lower for keyword in FOOTBALL_KEYWORDS)


def extract_football_keywords(title: str) -> List[str]:
    """Return the football keywords present in *title* (deduplicated)."""
    title_lower = (title or '').lower()
    found: List[str] = []
    for keyword in FOOTBALL_KEYWORDS:
        if keyword.lower() in title_lower and keyword not in found:
            found.append(keyword)
    return found
