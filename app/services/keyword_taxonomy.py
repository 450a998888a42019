"""
Industry keyword taxonomy.

Maps each supported industry to the ordered keywords used as analysis hints.
The table is built once at import and exposed read-only.
"""
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union


class Industry(str, Enum):
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    MARKETING = "marketing"
    EDUCATION = "education"
    CONSULTING = "consulting"
    SALES = "sales"
    OPERATIONS = "operations"
    ENGINEERING = "engineering"
    DATA_SCIENCE = "data_science"
    LEGAL = "legal"
    HUMAN_RESOURCES = "human_resources"


DEFAULT_INDUSTRY = Industry.TECHNOLOGY

INDUSTRY_KEYWORDS: Mapping[Industry, Tuple[str, ...]] = MappingProxyType({
    Industry.TECHNOLOGY: (
        "JavaScript", "Python", "React", "Node.js", "AWS", "Docker", "Kubernetes", "SQL", "NoSQL", "API",
        "Machine Learning", "AI", "Cloud Computing", "DevOps", "Agile", "Scrum", "Git", "CI/CD",
        "Microservices", "GraphQL", "TypeScript", "Vue.js", "Angular", "MongoDB", "PostgreSQL",
        "Redis", "Elasticsearch", "TensorFlow", "PyTorch", "Blockchain", "Cybersecurity", "REST API",
        "Serverless", "Terraform", "Jenkins", "Kafka", "Spark", "Hadoop", "Data Science",
    ),
    Industry.HEALTHCARE: (
        "Patient Care", "HIPAA", "Electronic Health Records", "Medical Terminology", "Clinical Research",
        "Healthcare Administration", "Medical Coding", "ICD-10", "CPT", "Epic", "Cerner", "FHIR",
        "Telemedicine", "Healthcare Quality", "Regulatory Compliance", "Medical Device", "Pharmacology",
        "Nursing", "Physical Therapy", "Radiology", "Laboratory", "Healthcare Analytics", "EMR",
        "Clinical Trials", "FDA Regulations", "Quality Assurance", "Patient Safety",
    ),
    Industry.FINANCE: (
        "Financial Analysis", "Risk Management", "Investment Banking", "Portfolio Management", "Trading",
        "Bloomberg Terminal", "Financial Modeling", "Excel", "SQL", "Python", "R", "GAAP", "IFRS",
        "Compliance", "Anti-Money Laundering", "KYC", "Credit Analysis", "Derivatives", "Fixed Income",
        "Equity Research", "Valuation", "Mergers & Acquisitions", "Private Equity", "Hedge Funds",
        "Basel III", "Sarbanes-Oxley", "Financial Planning", "Treasury Management", "Audit",
    ),
    Industry.MARKETING: (
        "Digital Marketing", "SEO", "SEM", "Social Media Marketing", "Content Marketing", "Email Marketing",
        "Google Analytics", "Google Ads", "Facebook Ads", "LinkedIn Ads", "Marketing Automation",
        "CRM", "Salesforce", "HubSpot", "A/B Testing", "Conversion Optimization", "Brand Management",
        "Market Research", "Customer Segmentation", "Lead Generation", "Marketing Strategy",
        "Influencer Marketing", "Affiliate Marketing", "Growth Hacking", "Customer Journey",
    ),
    Industry.EDUCATION: (
        "Curriculum Development", "Instructional Design", "Learning Management Systems", "Blackboard",
        "Canvas", "Moodle", "Educational Technology", "Student Assessment", "Differentiated Instruction",
        "Classroom Management", "Special Education", "ESL", "Common Core", "IEP", "504 Plans",
        "Professional Development", "Data-Driven Instruction", "Educational Research", "Online Learning",
        "STEM Education", "Blended Learning", "Student Engagement", "Learning Analytics",
    ),
    Industry.CONSULTING: (
        "Strategy Consulting", "Management Consulting", "Business Analysis", "Process Improvement",
        "Change Management", "Project Management", "Stakeholder Management", "Data Analysis",
        "PowerPoint", "Excel", "Tableau", "SQL", "Problem Solving", "Client Relations",
        "Industry Analysis", "Competitive Analysis", "Due Diligence", "Operational Excellence",
        "Digital Transformation", "Organizational Design", "Performance Management",
    ),
    Industry.SALES: (
        "Sales Strategy", "Lead Generation", "Prospecting", "Cold Calling", "CRM", "Salesforce",
        "Account Management", "Customer Relationship Management", "Sales Forecasting", "Territory Management",
        "B2B Sales", "B2C Sales", "Inside Sales", "Outside Sales", "Sales Enablement", "Negotiation",
        "Closing Techniques", "Pipeline Management", "Sales Analytics", "Customer Success",
        "Revenue Growth", "Channel Sales", "Enterprise Sales", "Solution Selling",
    ),
    Industry.OPERATIONS: (
        "Supply Chain Management", "Logistics", "Inventory Management", "Process Optimization",
        "Lean Manufacturing", "Six Sigma", "Quality Control", "Vendor Management", "Cost Reduction",
        "ERP Systems", "SAP", "Oracle", "Operations Research", "Data Analysis", "KPI Management",
        "Continuous Improvement", "Project Management", "Cross-functional Collaboration",
        "Warehouse Management", "Distribution", "Procurement", "Production Planning",
    ),
    Industry.ENGINEERING: (
        "CAD", "SolidWorks", "AutoCAD", "MATLAB", "Simulation", "Design for Manufacturing", "DFM",
        "Product Development", "Project Management", "Quality Assurance", "Testing", "Prototyping",
        "Materials Science", "Mechanical Engineering", "Electrical Engineering", "Civil Engineering",
        "Chemical Engineering", "Environmental Engineering", "Safety Engineering", "Regulatory Compliance",
        "FEA", "CFD", "PLC Programming", "Control Systems", "Robotics", "Automation",
    ),
    Industry.DATA_SCIENCE: (
        "Machine Learning", "Deep Learning", "Statistical Analysis", "Data Mining", "Big Data",
        "Python", "R", "SQL", "Tableau", "Power BI", "Hadoop", "Spark", "TensorFlow", "PyTorch",
        "Scikit-learn", "Pandas", "NumPy", "Data Visualization", "Predictive Modeling", "NLP",
        "Computer Vision", "A/B Testing", "Experimental Design", "Business Intelligence",
        "ETL", "Data Warehousing", "Cloud Platforms", "MLOps", "Feature Engineering",
    ),
    Industry.LEGAL: (
        "Legal Research", "Contract Law", "Litigation", "Corporate Law", "Intellectual Property",
        "Compliance", "Regulatory Affairs", "Due Diligence", "Legal Writing", "Negotiation",
        "Case Management", "Discovery", "Depositions", "Trial Preparation", "Appeals",
        "Employment Law", "Real Estate Law", "Family Law", "Criminal Law", "Immigration Law",
        "Securities Law", "Tax Law", "Environmental Law", "Healthcare Law",
    ),
    Industry.HUMAN_RESOURCES: (
        "Talent Acquisition", "Recruiting", "HRIS", "Workday", "SuccessFactors", "Performance Management",
        "Employee Relations", "Compensation & Benefits", "Training & Development", "Diversity & Inclusion",
        "Employment Law", "FMLA", "FLSA", "EEO", "HR Analytics", "Organizational Development",
        "Change Management", "Succession Planning", "Employee Engagement", "Onboarding",
        "Payroll", "Benefits Administration", "Labor Relations", "HR Strategy",
    ),
})


def resolve_industry(value: Optional[Union[Industry, str]]) -> Industry:
    """Map free-form input ("Data Science", "human-resources", ...) to an Industry, or the default."""
    if isinstance(value, Industry):
        return value
    if not isinstance(value, str):
        return DEFAULT_INDUSTRY
    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return Industry(normalized)
    except ValueError:
        return DEFAULT_INDUSTRY


def keywords_for(industry: Optional[Union[Industry, str]]) -> Tuple[str, ...]:
    """Keyword hints for an industry. Never fails; unknown input yields the default set."""
    return INDUSTRY_KEYWORDS[resolve_industry(industry)]


def supported_industries() -> Tuple[str, ...]:
    return tuple(industry.value for industry in Industry)
