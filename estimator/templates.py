"""
Industry templates — preset starting points for common project shapes.

A template's defaults are a draft merge-patch: applying one only overwrites
the fields it names, so choices the user already made elsewhere survive.
"""

from typing import List, Optional

from .draft import ConfigurationDraft, apply_patch
from .schemas import IndustryTemplate

TEMPLATE_CATEGORIES = {
    "e-commerce": "E-Commerce",
    "fintech": "Fintech",
    "healthcare": "Healthcare",
    "saas": "SaaS",
    "marketplace": "Marketplace",
    "education": "Education",
}

INDUSTRY_TEMPLATES = [
    IndustryTemplate(
        id="ecommerce-basic",
        name="Basic E-Commerce Store",
        category="e-commerce",
        description="Simple online store with product catalog, cart, and checkout",
        defaults={
            "project_type": "web-app",
            "complexity": "simple",
            "unique_screens": 8,
            "api_integrations": 3,
            "security_level": "standard",
            "test_coverage": "integration",
        },
        features=["Product catalog", "Shopping cart", "Checkout flow", "Order history", "Basic search"],
        tech_stack=["React", "Node.js", "PostgreSQL", "Stripe"],
        time_multiplier=1.0,
    ),
    IndustryTemplate(
        id="ecommerce-advanced",
        name="Advanced E-Commerce Platform",
        category="e-commerce",
        description="Full-featured e-commerce with inventory, analytics, and multi-vendor support",
        defaults={
            "project_type": "web-app",
            "complexity": "complex",
            "unique_screens": 25,
            "api_integrations": 8,
            "security_level": "enterprise",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
        },
        features=["Multi-vendor support", "Inventory management", "Analytics dashboard", "Promotions engine",
                  "Advanced search", "Reviews & ratings", "Wishlist", "Order tracking"],
        tech_stack=["React", "Node.js", "PostgreSQL", "Redis", "Elasticsearch", "Stripe"],
        time_multiplier=1.5,
    ),
    IndustryTemplate(
        id="fintech-wallet",
        name="Digital Wallet App",
        category="fintech",
        description="Mobile wallet with payments, transfers, and transaction history",
        defaults={
            "project_type": "mobile-app",
            "complexity": "complex",
            "unique_screens": 15,
            "api_integrations": 6,
            "security_level": "enterprise",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
        },
        features=["Account management", "P2P transfers", "Bill payments", "Transaction history",
                  "KYC verification", "Biometric auth", "Notifications"],
        tech_stack=["React Native", "Node.js", "PostgreSQL", "Plaid", "Stripe"],
        time_multiplier=1.6,
    ),
    IndustryTemplate(
        id="fintech-trading",
        name="Trading Platform",
        category="fintech",
        description="Stock/crypto trading platform with real-time data and portfolio management",
        defaults={
            "project_type": "web-app",
            "complexity": "complex",
            "unique_screens": 20,
            "api_integrations": 10,
            "security_level": "enterprise",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
            "animation_level": "advanced",
        },
        features=["Real-time market data", "Portfolio tracking", "Order execution", "Charts & analytics",
                  "Watchlists", "Price alerts", "News feed", "Risk assessment"],
        tech_stack=["React", "Python", "PostgreSQL", "Redis", "WebSocket", "TradingView"],
        time_multiplier=1.8,
    ),
    IndustryTemplate(
        id="healthcare-telehealth",
        name="Telehealth Platform",
        category="healthcare",
        description="Video consultations with appointment booking and patient records",
        defaults={
            "project_type": "web-app",
            "complexity": "complex",
            "unique_screens": 18,
            "api_integrations": 7,
            "security_level": "enterprise",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
        },
        features=["Video consultations", "Appointment scheduling", "Patient records", "Prescription management",
                  "Secure messaging", "Payment processing", "Insurance verification"],
        tech_stack=["React", "Node.js", "PostgreSQL", "WebRTC", "Twilio", "Stripe"],
        time_multiplier=1.7,
    ),
    IndustryTemplate(
        id="healthcare-ehr",
        name="Electronic Health Records",
        category="healthcare",
        description="Comprehensive EHR system for clinics and hospitals",
        defaults={
            "project_type": "web-app",
            "complexity": "complex",
            "unique_screens": 30,
            "api_integrations": 12,
            "security_level": "enterprise",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
            "database_size": "enterprise",
        },
        features=["Patient records", "Clinical documentation", "Lab results", "Imaging integration",
                  "Medication tracking", "Billing & coding", "Reporting", "HL7/FHIR integration"],
        tech_stack=["React", "Java", "PostgreSQL", "HL7 FHIR", "Redis"],
        time_multiplier=2.0,
    ),
    IndustryTemplate(
        id="saas-crm",
        name="CRM Platform",
        category="saas",
        description="Customer relationship management with sales pipeline and reporting",
        defaults={
            "project_type": "web-app",
            "complexity": "medium",
            "unique_screens": 15,
            "api_integrations": 5,
            "security_level": "standard",
            "test_coverage": "integration",
            "business_logic_complexity": "medium",
        },
        features=["Contact management", "Sales pipeline", "Email integration", "Task management",
                  "Reporting dashboard", "Team collaboration", "Activity tracking"],
        tech_stack=["React", "Node.js", "PostgreSQL", "Redis"],
        time_multiplier=1.2,
    ),
    IndustryTemplate(
        id="saas-pm",
        name="Project Management Tool",
        category="saas",
        description="Kanban boards, task tracking, and team collaboration",
        defaults={
            "project_type": "web-app",
            "complexity": "medium",
            "unique_screens": 12,
            "api_integrations": 4,
            "security_level": "standard",
            "test_coverage": "integration",
            "animation_level": "advanced",
        },
        features=["Kanban boards", "Task management", "Team workspaces", "File sharing",
                  "Comments & mentions", "Time tracking", "Gantt charts"],
        tech_stack=["React", "Node.js", "PostgreSQL", "WebSocket"],
        time_multiplier=1.1,
    ),
    IndustryTemplate(
        id="marketplace-services",
        name="Service Marketplace",
        category="marketplace",
        description="Platform connecting service providers with customers",
        defaults={
            "project_type": "web-app",
            "complexity": "complex",
            "unique_screens": 20,
            "api_integrations": 7,
            "security_level": "standard",
            "test_coverage": "e2e",
            "business_logic_complexity": "complex",
        },
        features=["Provider profiles", "Service listings", "Booking system", "Reviews & ratings",
                  "Messaging", "Payment escrow", "Dispute resolution", "Admin dashboard"],
        tech_stack=["React", "Node.js", "PostgreSQL", "Stripe Connect", "Twilio"],
        time_multiplier=1.4,
    ),
    IndustryTemplate(
        id="education-lms",
        name="Learning Management System",
        category="education",
        description="Online courses with video content, quizzes, and progress tracking",
        defaults={
            "project_type": "web-app",
            "complexity": "medium",
            "unique_screens": 16,
            "api_integrations": 5,
            "security_level": "standard",
            "test_coverage": "integration",
        },
        features=["Course catalog", "Video player", "Quizzes & assessments", "Progress tracking",
                  "Certificates", "Discussion forums", "Instructor dashboard"],
        tech_stack=["React", "Node.js", "PostgreSQL", "Mux", "Stripe"],
        time_multiplier=1.2,
    ),
]


def list_templates(category: Optional[str] = None) -> List[IndustryTemplate]:
    if category is None:
        return list(INDUSTRY_TEMPLATES)
    return [t for t in INDUSTRY_TEMPLATES if t.category == category]


def get_template(template_id: str) -> Optional[IndustryTemplate]:
    for template in INDUSTRY_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def apply_template(draft: ConfigurationDraft, template: IndustryTemplate) -> ConfigurationDraft:
    return apply_patch(draft, template.defaults)
