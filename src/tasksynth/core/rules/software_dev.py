"""
Software development rules.
"""

from tasksynth.core.items.models import GeneratedItem, GenerationContext
from tasksynth.core.responses import calculate_due_date, get_text, has_text
from tasksynth.core.rules.models import Responses, Rule, bullets, make_item


def _any_text(responses: Responses, *keys: str) -> bool:
    return any(has_text(responses, key) for key in keys)


def _requirements(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    project = get_text(responses, "project_description")
    features = get_text(responses, "core_features")
    completed = context.completion_timestamp
    return [
        make_item(
            "Create technical requirements document (TRD)",
            f"Project: {project}\nCore features: {features}\n\nInclude:\n"
            + bullets(
                [
                    "Functional and non-functional requirements",
                    "Architecture overview and data models",
                    "API and integration requirements",
                    "Success criteria",
                ]
            )
            + "\n\nGet stakeholder approval before build starts.",
            priority="high",
            due_date=calculate_due_date(completed, 5),
        ),
        make_item(
            "Create user stories and acceptance criteria",
            "Break requirements into user stories with acceptance criteria, "
            "prioritize with MoSCoW and estimate story points.",
            priority="high",
            due_date=calculate_due_date(completed, 6),
        ),
    ]


def _tech_stack(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    preferences = get_text(responses, "tech_preferences")
    platform = get_text(responses, "platform")
    language = get_text(responses, "programming_language")
    completed = context.completion_timestamp
    return [
        make_item(
            "Finalize technology stack",
            f"Preferences: {preferences}\nPlatform: {platform}\nLanguage: {language}\n\n"
            "Decide and document frontend, backend, database, hosting, CI/CD "
            "and third-party services, with alternatives considered.",
            priority="high",
            due_date=calculate_due_date(completed, 4),
        ),
        make_item(
            "Set up development environment",
            bullets(
                [
                    "Git repository and branch strategy",
                    "Linting and code style",
                    "Environment variable management",
                    "Containerized local setup",
                ]
            )
            + "\n\nWrite a README with setup instructions.",
            priority="high",
            due_date=calculate_due_date(completed, 7),
        ),
    ]


def _architecture(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    arch = get_text(responses, "architecture_type")
    scalability = get_text(responses, "scalability_requirements")
    completed = context.completion_timestamp
    return [
        make_item(
            "Create system architecture diagram",
            f"Architecture type: {arch}\nScalability needs: {scalability}\n\n"
            "Diagram components, data flow, API layout, auth flow, caching "
            "and load balancing.",
            priority="high",
            due_date=calculate_due_date(completed, 7),
        ),
        make_item(
            "Design database schema",
            "Produce the ER diagram, tables, indexes and constraints, and the "
            "migration and backup strategy.",
            priority="high",
            due_date=calculate_due_date(completed, 8),
        ),
    ]


def _api_design(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    integrations = get_text(responses, "integration_requirements")
    apis = get_text(responses, "third_party_apis")
    completed = context.completion_timestamp
    return [
        make_item(
            "Design REST/GraphQL API specification",
            f"Integrations: {integrations}\nThird-party APIs: {apis}\n\n"
            "Document endpoints, schemas, authentication, rate limits, error "
            "codes and versioning (OpenAPI or GraphQL schema).",
            priority="high",
            due_date=calculate_due_date(completed, 9),
        ),
        make_item(
            "Set up API documentation and testing tools",
            "Set up Postman or Swagger collections, mock endpoints for the "
            "frontend, and generated API docs.",
            priority="medium",
            due_date=calculate_due_date(completed, 10),
        ),
    ]


def _security(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    requirements = get_text(responses, "security_requirements")
    compliance = get_text(responses, "compliance_needs")
    completed = context.completion_timestamp
    return [
        make_item(
            "Implement security measures",
            f"Requirements: {requirements}\nCompliance: {compliance}\n\n"
            + bullets(
                [
                    "Authentication and role-based access control",
                    "Encryption at rest and in transit",
                    "Input validation, XSS and CSRF protection",
                    "Dependency vulnerability scanning",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 12),
        ),
        make_item(
            "Create security audit checklist",
            "Plan penetration tests, incident response, dependency updates "
            "and quarterly access reviews.",
            priority="medium",
            due_date=calculate_due_date(completed, 14),
        ),
    ]


def _testing(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    target = get_text(responses, "test_coverage_target", "80%")
    completed = context.completion_timestamp
    return [
        make_item(
            "Set up testing framework",
            f"Coverage target: {target}\n\n"
            + bullets(
                [
                    "Unit test framework and fixtures",
                    "API and database integration tests",
                    "End-to-end tests for critical flows",
                ]
            ),
            priority="high",
            due_date=calculate_due_date(completed, 10),
        ),
        make_item(
            "Implement CI/CD pipeline",
            "Automate tests and builds, set up staging and production "
            "deploys with rollback, and add deploy notifications.",
            priority="high",
            due_date=calculate_due_date(completed, 15),
        ),
    ]


def _documentation(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    return [
        make_item(
            "Create technical documentation",
            "Developer docs (setup, architecture, API reference, deployment) "
            "and user docs (guides, admin panel, troubleshooting).",
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 20),
        )
    ]


def _performance(responses: Responses, context: GenerationContext) -> list[GeneratedItem]:
    requirements = get_text(responses, "performance_requirements")
    load = get_text(responses, "expected_load")
    return [
        make_item(
            "Implement performance monitoring",
            f"Requirements: {requirements}\nExpected load: {load}\n\n"
            "Set up APM, query optimization, caching, load tests and alerts "
            "for degradation.",
            priority="medium",
            due_date=calculate_due_date(context.completion_timestamp, 18),
        )
    ]


SOFTWARE_DEV_RULES: tuple[Rule, ...] = (
    Rule(
        id="software-requirements-analysis",
        name="Requirements Documentation",
        description="Technical requirements and user stories",
        response_keys=("project_description", "core_features", "user_stories"),
        priority=10,
        condition=lambda r: _any_text(r, "project_description", "core_features", "user_stories"),
        generate=_requirements,
    ),
    Rule(
        id="software-tech-stack",
        name="Technology Stack Decision",
        description="Stack selection and dev environment",
        response_keys=("tech_preferences", "platform", "programming_language"),
        priority=9,
        condition=lambda r: _any_text(r, "tech_preferences", "platform", "programming_language"),
        generate=_tech_stack,
    ),
    Rule(
        id="software-architecture",
        name="System Architecture Design",
        description="Architecture and data model design",
        response_keys=("architecture_type", "scalability_requirements", "core_features"),
        priority=9,
        condition=lambda r: _any_text(
            r, "architecture_type", "scalability_requirements", "core_features"
        ),
        generate=_architecture,
    ),
    Rule(
        id="software-api-design",
        name="API Design and Documentation",
        description="API specification and tooling",
        response_keys=("integration_requirements", "third_party_apis", "core_features"),
        priority=8,
        condition=lambda r: _any_text(
            r, "integration_requirements", "third_party_apis", "core_features"
        ),
        generate=_api_design,
    ),
    Rule(
        id="software-security",
        name="Security Audit and Implementation",
        description="Security controls and audit plan",
        response_keys=("security_requirements", "compliance_needs", "user_data_handling"),
        priority=10,
        condition=lambda r: _any_text(
            r, "security_requirements", "compliance_needs", "user_data_handling"
        ),
        generate=_security,
    ),
    Rule(
        id="software-testing",
        name="Testing Framework Setup",
        description="Testing strategy and CI/CD",
        response_keys=("quality_requirements", "test_coverage_target"),
        priority=7,
        condition=lambda r: True,
        generate=_testing,
    ),
    Rule(
        id="software-documentation",
        name="Documentation Creation",
        description="Developer and user documentation",
        response_keys="project_description",
        priority=5,
        condition=lambda r: True,
        generate=_documentation,
    ),
    Rule(
        id="software-performance",
        name="Performance Optimization",
        description="Performance monitoring and tuning",
        response_keys=("performance_requirements", "expected_load"),
        priority=6,
        condition=lambda r: _any_text(r, "performance_requirements", "expected_load"),
        generate=_performance,
    ),
)
