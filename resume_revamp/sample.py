"""Built-in demo résumé, loaded without calling the model."""

from .schema_resume import Contact, Education, Experience, ResumeRecord

SAMPLE_RESUME = ResumeRecord(
    full_name="Alex Morgan",
    job_title="Senior Product Manager",
    contact=Contact(
        email="alex.morgan@example.com",
        phone="(555) 123-4567",
        location="San Francisco, CA",
        linkedin="linkedin.com/in/alexmorgan",
    ),
    summary=(
        "Results-driven Product Manager with 7+ years of experience leading "
        "cross-functional teams to build scalable software solutions. Proven "
        "track record of increasing user retention by 30% and driving revenue "
        "growth through data-driven product strategies."
    ),
    skills=(
        "Product Strategy",
        "Agile Methodologies",
        "User Research",
        "Data Analysis (SQL, Python)",
        "Stakeholder Management",
        "Jira/Confluence",
    ),
    experience=(
        Experience(
            role="Senior Product Manager",
            company="TechFlow Solutions",
            dates="2021 - Present",
            location="San Francisco, CA",
            description=(
                "Led the end-to-end launch of the company's flagship SaaS platform, acquiring 10k+ users in first 6 months.",
                "Implemented A/B testing frameworks that improved conversion rates by 25% year-over-year.",
                "Mentored 3 junior PMs and established internal best practices for roadmap planning.",
            ),
        ),
        Experience(
            role="Product Manager",
            company="Innovate Corp",
            dates="2018 - 2021",
            location="Austin, TX",
            description=(
                "Managed a cross-functional team of 15 engineers and designers to deliver mobile app features.",
                "Reduced churn by 15% through targeted user engagement campaigns and feature optimization.",
                "Collaborated with sales to define go-to-market strategies for enterprise clients.",
            ),
        ),
    ),
    education=(
        Education(degree="MBA", school="University of California, Berkeley", dates="2016 - 2018"),
        Education(degree="B.S. Computer Science", school="University of Texas at Austin", dates="2012 - 2016"),
    ),
)
