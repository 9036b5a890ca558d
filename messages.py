"""
Business copy sent back to users.

Kept apart from the dispatch logic so wording can change without touching
the routing rules.
"""

COMPANY_NAME = "Bluebex Software Pvt Ltd"

# Menu row id -> detail text shown when the service is picked
SERVICES = {
    "web_dev": (
        "🌐 *Web Development*\n• React, Angular, Vue\n• Node.js, Express, Laravel\n"
        "• eCommerce, Portals\n\n👇 *Choose an option below*"
    ),
    "app_dev": (
        "📱 *App Development*\n• Android, iOS, Flutter\n• React Native, Kotlin\n"
        "• App Store Support\n\n👇 *Choose an option below*"
    ),
    "devops": (
        "⚙️ *DevOps & Automation*\n• CI/CD, Docker, K8s\n• Jenkins, GitHub Actions\n"
        "• AWS, Azure, GCP\n\n👇 *Choose an option below*"
    ),
    "AI_ML": (
        "🤖 *AI & ML*\n• NLP, Vision, Forecasting\n• OpenAI, Python, TensorFlow\n"
        "• Business Automation\n\n👇 *Choose an option below*"
    ),
}

# Service prefix -> "learn more" text
DETAILS = {
    "web": (
        "🔍 *Web Tech Stack*\n• HTML, CSS, JS, React\n• Projects: eCommerce, Portals\n"
        "• SEO, Analytics, Optimization"
    ),
    "app": (
        "🔍 *Mobile Stack*\n• Flutter, React Native, Kotlin\n"
        "• Projects: Delivery, Learning, Ride Sharing\n• Deployed on Play/App Store"
    ),
    "devops": (
        "🔍 *DevOps Tools*\n• Docker, Jenkins, K8s\n• IaC: Terraform\n"
        "• Pipelines, Monitoring, Scaling"
    ),
    "AI": (
        "🔍 *AI/ML Use Cases*\n• Forecasting, NLP, Computer Vision\n• TensorFlow, OpenAI\n"
        "• Chatbots, Automation"
    ),
}

LEARN_MORE_SUFFIX = "_learn_more"
CONTACT_US = "contact_us"
FEEDBACK_FORM = "feedback_form"
BACK_TO_MENU = "back_to_menu"

SERVICE_BUTTONS_TAIL = [
    (CONTACT_US, "📞 Contact Us"),
    (BACK_TO_MENU, "🔙 Back to Menu"),
]

DETAIL_BUTTONS = [
    (FEEDBACK_FORM, "📝 Feedback"),
    (CONTACT_US, "📞 Contact Us"),
    (BACK_TO_MENU, "🔙 Back to Menu"),
]

CONTACT_TEXT = (
    "📞 *Contact Us*\nEmail: bluebexsoftware@gmail.com\nWebsite: https://bluebex.in\n"
    "Phone: +91 91649 49099\n\nWe’re excited to connect with you! 💙"
)

FEEDBACK_TEXT = "📝 *Feedback Form*\nWe value your feedback!\n👉 https://bluebex.in/feedback"

THANKS_TEXT = f"🙏 *Thank you for choosing {COMPANY_NAME}!*\nLet us know if you need anything else."

MENU_BODY = (
    f"🎉 Welcome to *{COMPANY_NAME}*!\n\nWe provide modern tech solutions.\n\n"
    "💡 Choose a service to explore:"
)
MENU_FOOTER = "👇 Select a service"
MENU_BUTTON = "Explore Services"
MENU_SECTIONS = [
    {
        "title": "Our Services",
        "rows": [
            {"id": "web_dev", "title": "🌐 Web Development", "description": "Websites, SEO, Portals"},
            {"id": "app_dev", "title": "📱 App Development", "description": "Android, iOS, Flutter"},
            {"id": "devops", "title": "⚙ DevOps & Cloud", "description": "CI/CD, AWS, Docker"},
            {"id": "AI_ML", "title": "🤖 AI & ML", "description": "Chatbots, Forecasting, OpenAI"},
        ],
    }
]


def menu_header(name):
    return f"👋 Hello {name}"


def service_prefix(selection_id):
    """'web_dev' -> 'web', 'AI_learn_more' -> 'AI', 'devops' -> 'devops'."""
    return selection_id.split("_")[0]
