"""
Web design rules.
"""

from tasksynth.core.items.models import GeneratedItem, GenerationContext
from tasksynth.core.responses import (
    calculate_due_date,
    get_list,
    get_text,
    get_value,
    has_files,
    has_text,
    has_value,
    parse_date,
)
from tasksynth.core.rules.models import Responses, Rule, bullets, make_item


def _brand_assets(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    completed = context.completion_timestamp
    items = []
    if has_files(responses, "logo_upload"):
        items.append(
            make_item(
                "Review and optimize logo files",
                "Check the uploaded logo files:\n"
                + bullets(
                    [
                        "High resolution (300 DPI for print)",
                        "PNG, SVG and JPG variants",
                        "Web-optimized sizes",
                        "Transparent background versions",
                    ]
                )
                + "\n\nPrepare any missing versions.",
                priority="high",
                due_date=calculate_due_date(completed, 2),
            )
        )
    if has_files(responses, "brand_assets"):
        items.append(
            make_item(
                "Organize brand assets library",
                "Centralize the uploaded brand material:\n"
                + bullets(
                    [
                        "Color palette extraction",
                        "Font identification",
                        "Style guide notes",
                        "Asset naming conventions",
                    ]
                ),
                priority="medium",
                due_date=calculate_due_date(completed, 3),
            )
        )
    return items


def _style_research(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    style = get_text(responses, "design_style")
    completed = context.completion_timestamp
    return [
        make_item(
            f"Create {style} design moodboard",
            f"Compile a moodboard for the {style} aesthetic:\n"
            + bullets(
                [
                    "10-15 reference websites",
                    "Color palette and typography suggestions",
                    "UI element and layout examples",
                    "Interaction ideas",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 3),
            category="content",
        ),
        make_item(
            "Present design direction to client",
            f"Present the {style} direction: moodboard overview, two or three "
            "concept options with rationale, and next steps.",
            priority="medium",
            due_date=calculate_due_date(completed, 7),
            category="review",
        ),
    ]


def _functionality(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    goal = get_text(responses, "website_goal").lower()
    completed = context.completion_timestamp
    items = []

    if "ecommerce" in goal or "e-commerce" in goal or "sell" in goal:
        items.append(
            make_item(
                "Research e-commerce platform options",
                "Compare Shopify, WooCommerce and a custom build:\n"
                + bullets(
                    [
                        "Payment gateways",
                        "Inventory management",
                        "Shipping and tax setup",
                    ]
                )
                + "\n\nRecommend one option with pros and cons.",
                priority="high",
                due_date=calculate_due_date(completed, 5),
            )
        )
        items.append(
            make_item(
                "Plan product catalog structure",
                "Design categories, product attributes and variations, "
                "filtering, product page layout, and the cart and checkout flow.",
                priority="medium",
                due_date=calculate_due_date(completed, 7),
            )
        )

    if "lead" in goal or "contact" in goal:
        items.append(
            make_item(
                "Design lead capture strategy",
                "Plan form placement, CTAs, lead magnets, and the email "
                "marketing and CRM hand-off.",
                priority="high",
                due_date=calculate_due_date(completed, 5),
            )
        )

    if "portfolio" in goal or "showcase" in goal:
        items.append(
            make_item(
                "Plan portfolio showcase layout",
                "Design project cards, filtering, the case study template "
                "and gallery behavior.",
                priority="medium",
                due_date=calculate_due_date(completed, 6),
            )
        )

    return items


def _pages(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    pages = [str(page) for page in get_list(responses, "required_pages")]
    completed = context.completion_timestamp
    return [
        make_item(
            "Create sitemap and information architecture",
            "Required pages:\n"
            + bullets(pages)
            + "\n\nDefine hierarchy, navigation, internal linking and URL structure.",
            priority="high",
            due_date=calculate_due_date(completed, 4),
        ),
        make_item(
            "Plan content requirements for all pages",
            "For each page list sections, word count, media and CTAs:\n" + bullets(pages),
            priority="medium",
            due_date=calculate_due_date(completed, 5),
        ),
    ]


def _audience(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    audience = get_text(responses, "target_audience")
    completed = context.completion_timestamp
    return [
        make_item(
            "Create user personas",
            f"Target audience: {audience}\n\nBuild two or three personas covering "
            "goals, pain points, devices and decision factors.",
            priority="high",
            due_date=calculate_due_date(completed, 5),
        ),
        make_item(
            "Research competitor websites",
            f"Review 5-10 competitors targeting {audience}: design patterns, "
            "content strategy, UX strengths and conversion tactics.",
            priority="medium",
            due_date=calculate_due_date(completed, 6),
        ),
    ]


def _content_strategy(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    business = get_text(responses, "business_description")
    personality = get_text(responses, "brand_personality")
    completed = context.completion_timestamp
    return [
        make_item(
            "Develop brand messaging and tone of voice",
            f"Business: {business}\nPersonality: {personality}\n\n"
            "Write the messaging guide:\n"
            + bullets(
                [
                    "Voice characteristics, do's and don'ts",
                    "Headline formulas and CTA language",
                    "Value proposition statements",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 7),
        ),
        make_item(
            "Create content wireframes",
            "Show content hierarchy, section layouts, media locations, CTA "
            "positions and trust elements.",
            priority="medium",
            due_date=calculate_due_date(completed, 8),
        ),
    ]


def _technical_setup(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    hosting = get_text(responses, "hosting")
    domain = get_text(responses, "domain_name")
    completed = context.completion_timestamp
    items = []
    if domain:
        items.append(
            make_item(
                f"Set up domain: {domain}",
                "Verify ownership, configure DNS records, SSL, email forwarding "
                "and CDN, then check propagation.",
                priority="high",
                due_date=calculate_due_date(completed, 3),
            )
        )
    if hosting:
        items.append(
            make_item(
                "Configure hosting environment",
                f"Hosting: {hosting}\n\n"
                + bullets(
                    [
                        "Create the hosting account or server",
                        "Set up a staging environment",
                        "Configure backups and monitoring",
                        "Store access credentials",
                    ]
                ),
                priority="high",
                due_date=calculate_due_date(completed, 4),
            )
        )
    return items


def _launch(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    launch = parse_date(get_value(responses, "launch_date"), context.completion_timestamp)
    due = (
        calculate_due_date(launch, -7)
        if launch
        else calculate_due_date(context.completion_timestamp, 14)
    )
    return [
        make_item(
            "Create pre-launch checklist",
            "Testing:\n"
            + bullets(
                [
                    "Cross-browser and mobile checks",
                    "Forms, page speed, analytics",
                    "Security audit",
                ]
            )
            + "\n\nContent:\n"
            + bullets(["Proofread copy", "Verify links and metadata"])
            + "\n\nTechnical:\n"
            + bullets(["Backups and SSL", "Redirects and DNS cutover plan"]),
            priority="high",
            due_date=due,
        )
    ]


WEB_DESIGN_RULES: tuple[Rule, ...] = (
    Rule(
        id="web-design-logo-upload",
        name="Logo Upload Review",
        description="Review and optimize uploaded logo and brand files",
        response_keys=("logo_upload", "brand_assets"),
        priority=10,
        condition=lambda r: has_files(r, "logo_upload") or has_files(r, "brand_assets"),
        generate=_brand_assets,
    ),
    Rule(
        id="web-design-style-research",
        name="Design Style Research",
        description="Moodboard for the selected design style",
        response_keys="design_style",
        priority=9,
        condition=lambda r: has_text(r, "design_style"),
        generate=_style_research,
    ),
    Rule(
        id="web-design-functionality",
        name="Functionality Planning",
        description="Technical requirements from the website goal",
        response_keys="website_goal",
        priority=8,
        condition=lambda r: has_text(r, "website_goal"),
        generate=_functionality,
    ),
    Rule(
        id="web-design-pages-planning",
        name="Page Structure Planning",
        description="Sitemap and per-page content needs",
        response_keys="required_pages",
        priority=7,
        condition=lambda r: len(get_list(r, "required_pages")) > 0,
        generate=_pages,
    ),
    Rule(
        id="web-design-audience-research",
        name="Target Audience Research",
        description="Personas and competitor research",
        response_keys="target_audience",
        priority=8,
        condition=lambda r: has_text(r, "target_audience"),
        generate=_audience,
    ),
    Rule(
        id="web-design-content-strategy",
        name="Content Strategy Development",
        description="Messaging guide and content wireframes",
        response_keys=("business_description", "brand_personality"),
        priority=6,
        condition=lambda r: has_text(r, "business_description")
        or has_text(r, "brand_personality"),
        generate=_content_strategy,
    ),
    Rule(
        id="web-design-technical-setup",
        name="Technical Setup",
        description="Domain and hosting setup",
        response_keys=("hosting", "domain_name"),
        priority=7,
        condition=lambda r: has_text(r, "hosting") or has_text(r, "domain_name"),
        generate=_technical_setup,
    ),
    Rule(
        id="web-design-launch-prep",
        name="Launch Preparation",
        description="Pre-launch checklist",
        response_keys="launch_date",
        priority=5,
        condition=lambda r: has_value(r, "launch_date"),
        generate=_launch,
    ),
)
