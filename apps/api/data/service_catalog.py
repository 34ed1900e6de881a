from dataclasses import dataclass


@dataclass(frozen=True)
class ServiceInfo:
    key: str
    title_en: str
    title_zh: str
    keywords: tuple[str, ...]
    description: str
    benefits: tuple[str, ...]
    call_to_action: str

    @property
    def name(self) -> str:
        return f"{self.title_en} ({self.title_zh})"


# Declaration order matters: detection returns the first entry with any keyword hit.
SERVICES: tuple[ServiceInfo, ...] = (
    ServiceInfo(
        key="interlocking",
        title_en="Interlocking",
        title_zh="铺砖",
        keywords=("interlocking", "paver", "铺砖", "铺路", "pavers", "driveway", "patio"),
        description="Professional interlocking paver installation using premium materials and expert craftsmanship.",
        benefits=(
            "Beautiful and durable surface",
            "Custom design options",
            "Enhanced property value",
            "Long-lasting quality",
        ),
        call_to_action="Would you like a free consultation for your interlocking project?",
    ),
    ServiceInfo(
        key="powerwashing",
        title_en="Powerwashing",
        title_zh="高压清洗",
        keywords=("powerwashing", "power wash", "cleaning", "clean", "高压清洗", "清洗", "清理", "污渍"),
        description="Professional power washing to remove weeds, dirt, and stains from brick joints and outdoor surfaces.",
        benefits=(
            "Removes stubborn weeds and dirt",
            "Eco-friendly cleaning solutions",
            "Restores outdoor space beauty",
            "Extends surface lifespan",
        ),
        call_to_action="Ready to restore your outdoor space? Let's schedule a free estimate!",
    ),
    ServiceInfo(
        key="relevelling",
        title_en="Relevelling",
        title_zh="车道修复",
        keywords=("relevelling", "releveling", "driveway", "repair", "sunken", "车道", "修复", "下沉", "坑洼"),
        description="Expert repair and relevelling of sunken or damaged driveways to ensure safety and aesthetics.",
        benefits=(
            "Improved safety",
            "Enhanced appearance",
            "Extended driveway lifespan",
            "Professional installation",
        ),
        call_to_action="Let us assess your driveway condition. Free quote available!",
    ),
    ServiceInfo(
        key="polymersand",
        title_en="Polymer Sand",
        title_zh="胶沙更换",
        keywords=("polymer sand", "polymeric sand", "胶沙", "砂", "sand", "joint", "缝隙", "杂草"),
        description="High-quality polymeric sand filling for brick joints to prevent weed growth and enhance drainage.",
        benefits=(
            "Prevents weed growth",
            "Improves drainage",
            "Extends paver lifespan",
            "Professional installation",
        ),
        call_to_action="Interested in protecting your pavers with polymer sand?",
    ),
    ServiceInfo(
        key="sealing",
        title_en="Paver Sealing",
        title_zh="铺路石密封",
        keywords=("sealing", "seal", "paver sealing", "密封", "保护", "褪色", "污渍", "防护"),
        description="Professional paver sealing to protect your investment and maintain long-term beauty.",
        benefits=(
            "Prevents fading",
            "Protects from stains",
            "Maintains appearance",
            "Extends paver life",
        ),
        call_to_action="Protect your pavers with professional sealing. Get a free quote!",
    ),
    ServiceInfo(
        key="yardworks",
        title_en="Yard Works",
        title_zh="庭院工作",
        keywords=("yard works", "yard", "landscaping", "landscape", "design", "庭院", "景观", "花园", "绿化"),
        description="Comprehensive yard maintenance and renovation including landscape design, planting, and hardscaping.",
        benefits=(
            "Complete yard transformation",
            "Professional design",
            "Quality materials",
            "Expert installation",
        ),
        call_to_action="Let's create your dream yard! Schedule a free design consultation.",
    ),
)

SERVICES_BY_KEY: dict[str, ServiceInfo] = {s.key: s for s in SERVICES}

COMPANY = {
    "name": "Premium Landscaping Services",
    "phone": "(416) 555-1234",
    "email": "info@premiumlandscaping.ca",
    "service_area": "Toronto, GTA",
    "years": 15,
}


def service_display_name(key: str) -> str:
    svc = SERVICES_BY_KEY.get(key)
    return svc.name if svc else key
