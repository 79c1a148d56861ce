"""Built-in bilingual vocabulary the default lexicon is compiled from."""

from __future__ import annotations

from typing import Dict, List, Tuple

SYNONYM_GROUPS: List[List[str]] = [
    ["restaurant", "restaurants", "مطعم", "مطاعم", "food", "طعام", "أكل", "اكل", "dining"],
    ["cafe", "coffee", "coffeeshop", "قهوة", "كافي", "كافيه", "مقهى", "كوفي"],
    ["hotel", "hotels", "فندق", "فنادق", "accommodation", "إقامة", "اقامه", "نزل"],
    ["shop", "store", "متجر", "محل", "دكان", "shopping", "تسوق"],
    ["market", "supermarket", "سوق", "اسواق", "أسواق", "ماركت", "سوبرماركت", "بقالة"],
    ["gym", "fitness", "نادي", "رياضة", "صالة", "رياضي", "جيم", "لياقة"],
    [
        "hospital", "clinic", "مستشفى", "عيادة", "صحة", "طبي", "health",
        "medical", "doctor", "دكتور", "طبيب",
    ],
    ["pharmacy", "صيدلية", "صيدليه", "دواء", "medicine"],
    ["school", "مدرسة", "تعليم", "education", "university", "جامعة", "كلية", "college"],
    ["bank", "بنك", "مصرف", "banking", "مالي", "financial"],
    ["salon", "barber", "صالون", "حلاق", "حلاقة", "beauty", "جمال", "تجميل"],
    ["car", "auto", "سيارة", "سيارات", "automotive", "garage", "كراج", "ورشة"],
    ["travel", "tourism", "سياحة", "سفر", "رحلات", "trip", "tours"],
    ["lawyer", "legal", "محامي", "قانون", "قانوني", "محاماة"],
    ["real estate", "عقارات", "عقار", "property", "بيع", "إيجار"],
    ["construction", "بناء", "مقاولات", "contractor", "مقاول"],
    ["tech", "technology", "تقنية", "تكنولوجيا", "it", "برمجة", "software"],
    ["delivery", "توصيل", "شحن", "shipping", "logistics"],
    ["wedding", "زفاف", "عرس", "حفلات", "events", "فعاليات", "حفلة"],
    ["cleaning", "تنظيف", "نظافة", "laundry", "غسيل", "مغسلة"],
    ["pet", "حيوانات", "بيطري", "veterinary", "vet"],
    ["photography", "تصوير", "مصور", "studio", "ستوديو", "استوديو"],
    ["print", "printing", "طباعة", "مطبعة"],
    ["jewelry", "مجوهرات", "ذهب", "gold", "فضة", "silver"],
    ["perfume", "عطور", "عطر", "fragrance"],
    ["mobile", "phone", "جوال", "هاتف", "موبايل", "اتصالات", "telecom"],
    ["furniture", "أثاث", "اثاث", "مفروشات"],
    ["electronics", "إلكترونيات", "الكترونيات", "كهربائي", "electrical"],
    ["clothing", "clothes", "ملابس", "أزياء", "ازياء", "fashion", "موضة"],
    ["sweets", "حلويات", "حلا", "bakery", "مخبز", "خبز", "cake", "كيك"],
    ["air conditioning", "تكييف", "مكيفات", "ac", "تبريد", "cooling"],
    ["plumber", "plumbing", "سباكة", "سباك"],
    ["electrician", "كهربائي", "كهرباء"],
    ["fast food", "وجبات سريعة", "فاست فود", "برجر", "burger", "pizza", "بيتزا"],
    ["oil", "نفط", "بترول", "petroleum", "gas", "غاز"],
    ["exchange", "صرافة", "صراف", "تحويل", "currency"],
    ["insurance", "تأمين", "تامين"],
]

# Canonical key -> spellings; the first entry is the English display name and
# the second the Arabic one.
CITY_NAMES: Dict[str, List[str]] = {
    "muscat": ["Muscat", "مسقط", "مسكت"],
    "salalah": ["Salalah", "صلالة", "صلاله"],
    "sohar": ["Sohar", "صحار"],
    "nizwa": ["Nizwa", "نزوى"],
    "sur": ["Sur", "صور"],
    "ibri": ["Ibri", "عبري"],
    "barka": ["Barka", "بركاء", "بركا"],
    "rustaq": ["Rustaq", "الرستاق", "رستاق"],
    "bahla": ["Bahla", "بهلا", "بهلاء"],
    "khasab": ["Khasab", "خصب"],
    "ibra": ["Ibra", "إبراء", "ابرا"],
    "adam": ["Adam", "أدم", "ادم"],
    "bidiyah": ["Bidiyah", "بدية", "بديه"],
    "seeb": ["Seeb", "السيب", "سيب"],
    "bawshar": ["Bawshar", "بوشر"],
    "mutrah": ["Mutrah", "مطرح"],
    "amerat": ["Amerat", "العامرات", "عامرات"],
    "qurum": ["Qurum", "القرم", "قرم"],
    "ruwi": ["Ruwi", "روي"],
    "dubai": ["Dubai", "دبي"],
    "doha": ["Doha", "الدوحة", "دوحة"],
    "riyadh": ["Riyadh", "الرياض", "رياض"],
    "jeddah": ["Jeddah", "جدة", "جده"],
    "manama": ["Manama", "المنامة", "منامه"],
    "kuwait": ["Kuwait", "الكويت", "كويت"],
}

ATTRIBUTE_KEYWORDS: Dict[str, List[str]] = {
    "verified": ["verified", "موثق", "موثوق", "معتمد"],
    "special": ["special", "مميز", "خاص", "vip"],
    "featured": ["featured", "مبرز", "بارز", "مشهور", "popular", "famous"],
    "new": ["new", "جديد", "حديث", "latest", "newest"],
    "open": ["open", "مفتوح", "24/7"],
}

# Checked in order against the raw query; the first match wins, "find" otherwise.
INTENT_PATTERNS: List[Tuple[str, str]] = [
    (r"قارن|الفرق|\bcompare\b|\bcomparison\b|\bversus\b|\bvs\b", "compare"),
    (r"اقترح|نصح|ترشح|رشح|\brecommend|\bsuggest", "recommend"),
    (r"معلومات|تفاصيل|\bعن\b|\binfo\b|\binformation\b|\bdetails?\b|\babout\b", "info"),
    (r"استعرض|تصفح|\bعرض\b|\bكل\b|\bbrowse\b|\ball\b|\blist\b", "browse"),
]

# Markers that turn a short follow-up into a refinement of the previous query.
REFINEMENT_PATTERN = r"أيضا|أيضاً|كمان|وكمان|غير|ثاني|بعد|\balso\b|\bmore\b|\belse\b|\banother\b"
