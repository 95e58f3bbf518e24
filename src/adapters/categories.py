"""Static Bilibili category (tid) table used by the summary formatter."""

from __future__ import annotations

UNKNOWN_ZONE = "未知分区"

ZONES: dict[int, str] = {
    1: "动画", 24: "MAD·AMV", 25: "MMD·3D", 47: "短片·手书", 210: "手办·模玩", 86: "特摄", 27: "综合",
    13: "番剧", 33: "连载动画", 32: "完结动画", 51: "资讯", 152: "官方延伸",
    167: "国创", 153: "国产动画", 168: "国产原创相关", 169: "布袋戏", 170: "资讯", 195: "动态漫·广播剧",
    3: "音乐", 28: "原创音乐", 31: "翻唱", 30: "VOCALOID·电声", 194: "电音", 59: "演奏", 193: "MV",
    29: "音乐现场", 130: "音乐综合", 243: "乐评盘点", 244: "VLOG",
    129: "舞蹈", 20: "宅舞", 154: "三次元舞蹈", 156: "舞蹈教程", 198: "原创舞蹈", 199: "新势力舞蹈",
    200: "国风舞蹈", 255: "颜值·网红舞",
    4: "游戏", 17: "单机游戏", 171: "电子竞技", 172: "手机游戏", 65: "网络游戏", 173: "家用机", 121: "GMV",
    136: "音游", 19: "Mugen",
    36: "知识", 201: "科学科普", 124: "社科·法律·心理", 207: "财经商业", 208: "校园学习", 209: "职业职场",
    228: "人文历史", 229: "设计·创意", 122: "野生技术协会",
    188: "科技", 95: "数码", 230: "软件应用", 231: "计算机技术", 232: "工业·工程·机械", 233: "极客DIY",
    234: "运动", 235: "篮球", 249: "足球", 164: "健身", 236: "竞技体育", 237: "运动后花园", 238: "运动综合",
    223: "汽车", 176: "汽车生活", 224: "汽车选购", 225: "测评安利", 226: "汽车赛事", 227: "改装玩车",
    160: "生活", 138: "搞笑", 21: "日常", 76: "美食圈", 75: "动物圈", 161: "手工", 162: "绘画", 163: "运动",
    174: "其他", 239: "家居房产", 240: "数码", 254: "亲子", 250: "出行", 251: "三农",
    211: "美食", 212: "美食侦探", 213: "美食测评", 214: "田园美食", 215: "美食记录",
    217: "动物圈", 218: "喵星人", 219: "汪星人", 220: "大熊猫", 221: "野生动物", 222: "爬宠/小宠",
    119: "鬼畜", 22: "鬼畜调教", 26: "音MAD", 126: "人力VOCALOID", 216: "鬼畜剧场", 127: "教程演示",
    155: "时尚", 157: "美妆护肤", 158: "穿搭", 159: "时尚潮流", 192: "风尚标", 252: "仿妆cos",
    202: "资讯", 203: "热点", 204: "环球", 205: "社会", 206: "综合",
    165: "广告", 166: "广告",
    5: "娱乐", 71: "综艺", 241: "娱乐杂谈", 242: "粉丝创作", 137: "明星动态",
    181: "影视", 182: "影视杂谈", 183: "影视剪辑", 85: "小剧场", 184: "预告·资讯",
    177: "纪录片", 37: "人文·历史", 178: "科学·探索·自然", 179: "军事", 180: "社会·美食·旅行",
    23: "电影", 147: "华语电影", 145: "欧美电影", 146: "日本电影", 83: "其他国家",
    11: "电视剧", 185: "国产剧", 187: "海外剧",
}


def zone_name(tid: int) -> str:
    return ZONES.get(tid, UNKNOWN_ZONE)
