"""
CFR Titles
==========

Reference table of the 50 titles of the Code of Federal Regulations,
with the agency short name used for each and the opening text the
synthetic source builds section content from.

Version: 0.1.0
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TitleInfo:
    """One CFR title."""

    number: int
    name: str
    short_name: str
    template: str

    @property
    def description(self) -> str:
        return f"Federal regulations for {self.name}"


def generic_template(name: str) -> str:
    return (
        f"Federal regulations for {name} establish standards, procedures, and requirements "
        "for regulated entities. Compliance requires documentation, reporting, and regular inspections."
    )


CFR_TITLES: tuple[TitleInfo, ...] = (
    TitleInfo(
        1,
        "General Provisions",
        "GEN",
        "This title establishes general administrative provisions and procedures applicable across "
        "federal agencies. Agencies must comply with standardized reporting requirements, maintain "
        "accurate records, and follow prescribed notification procedures.",
    ),
    TitleInfo(
        2,
        "Grants and Agreements",
        "OMB",
        "Federal grant and agreement procedures require recipients to maintain detailed financial "
        "records, comply with audit requirements, and submit periodic performance reports. All "
        "expenditures must be documented and justified.",
    ),
    TitleInfo(
        3,
        "The President",
        "EOP",
        "Executive orders and presidential directives establish policy frameworks for federal "
        "agencies. Implementation requires coordination among departments and regular progress "
        "reporting to the Executive Office.",
    ),
    TitleInfo(
        4,
        "Accounts",
        "GAO",
        "Federal accounting standards require accurate financial reporting, internal controls, and "
        "compliance with Generally Accepted Accounting Principles. Agencies must maintain detailed "
        "transaction records and submit quarterly reports.",
    ),
    TitleInfo(
        5,
        "Administrative Personnel",
        "OPM",
        "Federal personnel management includes recruitment, classification, compensation, and "
        "performance evaluation procedures. Agencies must ensure equal employment opportunity and "
        "maintain comprehensive personnel records.",
    ),
    TitleInfo(
        6,
        "Domestic Security",
        "DHS",
        "Homeland security regulations establish threat assessment procedures, emergency response "
        "protocols, and information sharing requirements among federal, state, and local agencies.",
    ),
    TitleInfo(
        7,
        "Agriculture",
        "USDA",
        "Agricultural regulations cover food safety, crop insurance, conservation programs, and "
        "rural development initiatives. Compliance requires detailed documentation and regular "
        "inspections.",
    ),
    TitleInfo(
        8,
        "Aliens and Nationality",
        "USCIS",
        "Immigration regulations establish admission procedures, documentation requirements, and "
        "enforcement mechanisms. Processing requires comprehensive background checks and "
        "documentation review.",
    ),
    TitleInfo(
        9,
        "Animals and Animal Products",
        "APHIS",
        "Veterinary and animal product regulations ensure public health through inspection "
        "requirements, disease control measures, and facility sanitation standards.",
    ),
    TitleInfo(
        10,
        "Energy",
        "DOE",
        "Energy regulations cover nuclear safety, renewable energy standards, and utility oversight. "
        "Compliance requires technical documentation and regular safety assessments.",
    ),
    TitleInfo(
        11,
        "Federal Elections",
        "FEC",
        "Campaign finance regulations establish contribution limits, disclosure requirements, and "
        "enforcement procedures. Candidates must maintain detailed financial records and submit "
        "periodic reports.",
    ),
    TitleInfo(
        12,
        "Banks and Banking",
        "FRB",
        "Banking regulations ensure financial stability through capital requirements, risk "
        "management standards, and consumer protection measures. Regular examinations verify "
        "compliance.",
    ),
    TitleInfo(
        13,
        "Business Credit and Assistance",
        "SBA",
        "Small business programs provide loans, grants, and technical assistance. Recipients must "
        "meet eligibility criteria and comply with reporting requirements.",
    ),
    TitleInfo(
        14,
        "Aeronautics and Space",
        "FAA",
        "Aviation safety regulations establish aircraft certification, pilot licensing, and "
        "operational standards. Compliance requires regular inspections and maintenance "
        "documentation.",
    ),
    TitleInfo(
        15,
        "Commerce and Foreign Trade",
        "DOC",
        "International trade regulations cover export controls, import procedures, and trade "
        "agreement implementation. Documentation must verify compliance with applicable "
        "restrictions.",
    ),
    TitleInfo(
        16,
        "Commercial Practices",
        "FTC",
        "Consumer protection regulations prohibit unfair or deceptive practices and establish "
        "disclosure requirements. Companies must maintain compliance programs and customer "
        "complaint procedures.",
    ),
    TitleInfo(
        17,
        "Commodity and Securities Exchanges",
        "SEC",
        "Securities regulations require public companies to file periodic reports, maintain "
        "internal controls, and provide accurate investor disclosures.",
    ),
    TitleInfo(
        18,
        "Conservation of Power and Water Resources",
        "FERC",
        "Utility regulations establish rate structures, service standards, and environmental "
        "compliance requirements. Regular filings demonstrate cost recovery and system reliability.",
    ),
    TitleInfo(
        19,
        "Customs Duties",
        "CBP",
        "Import regulations establish classification procedures, duty assessment, and entry "
        "documentation requirements. Importers must maintain detailed transaction records.",
    ),
    TitleInfo(
        20,
        "Employees' Benefits",
        "SSA",
        "Employee benefit regulations cover pension plans, health insurance, and workers "
        "compensation. Plan administrators must file annual reports and maintain participant "
        "records.",
    ),
    TitleInfo(
        21,
        "Food and Drugs",
        "FDA",
        "FDA regulations ensure product safety through premarket approval, manufacturing standards, "
        "and post-market surveillance. Companies must maintain comprehensive quality systems.",
    ),
    TitleInfo(
        22,
        "Foreign Relations",
        "DOS",
        "Diplomatic regulations establish embassy operations, visa procedures, and international "
        "agreement implementation. Documentation must comply with treaty obligations.",
    ),
    TitleInfo(
        23,
        "Highways",
        "FHWA",
        "Highway safety regulations establish design standards, construction specifications, and "
        "maintenance requirements. State agencies must demonstrate compliance for federal funding.",
    ),
    TitleInfo(
        24,
        "Housing and Urban Development",
        "HUD",
        "Housing regulations provide affordable housing programs, fair housing enforcement, and "
        "community development funding. Recipients must meet eligibility and performance standards.",
    ),
    TitleInfo(
        25,
        "Indians",
        "BIA",
        "Tribal regulations establish government-to-government relationships, land management "
        "procedures, and program administration. Implementation requires consultation with tribal "
        "authorities.",
    ),
    TitleInfo(
        26,
        "Internal Revenue",
        "IRS",
        "Tax regulations establish filing requirements, payment procedures, and enforcement "
        "mechanisms. Taxpayers must maintain supporting documentation for all reported items.",
    ),
    TitleInfo(
        27,
        "Alcohol, Tobacco Products and Firearms",
        "ATF",
        "ATF regulations control manufacturing, distribution, and sales of regulated products. "
        "Licensees must maintain detailed records and submit regular reports.",
    ),
    TitleInfo(
        28,
        "Judicial Administration",
        "DOJ",
        "Court administration regulations establish case management procedures, filing "
        "requirements, and administrative standards. Courts must maintain accurate records and "
        "statistical reports.",
    ),
    TitleInfo(
        29,
        "Labor",
        "DOL",
        "Labor regulations establish workplace safety standards, wage and hour requirements, and "
        "collective bargaining procedures. Employers must maintain compliance programs and employee "
        "records.",
    ),
    TitleInfo(
        30,
        "Mineral Resources",
        "MSHA",
        "Mining regulations establish extraction permits, safety standards, and environmental "
        "protection requirements. Operators must demonstrate compliance through regular inspections.",
    ),
    TitleInfo(
        31,
        "Money and Finance: Treasury",
        "TREAS",
        "Treasury regulations establish fiscal policy implementation, debt management, and "
        "financial institution oversight. Regular reporting ensures system stability.",
    ),
    TitleInfo(
        32,
        "National Defense",
        "DOD",
        "Defense regulations establish procurement procedures, security requirements, and "
        "operational standards. Contractors must maintain facility clearances and personnel "
        "security.",
    ),
    TitleInfo(
        33,
        "Navigation and Navigable Waters",
        "USCG",
        "Maritime regulations establish vessel safety standards, navigation procedures, and "
        "environmental protection requirements. Operators must maintain certification and "
        "inspection records.",
    ),
    TitleInfo(
        34,
        "Education",
        "ED",
        "Education regulations establish funding formulas, academic standards, and accountability "
        "measures. Recipients must demonstrate student progress and fiscal responsibility.",
    ),
    TitleInfo(
        35,
        "Panama Canal",
        "PCC",
        "Canal operations require coordination with international shipping, maintenance of "
        "navigation standards, and environmental protection. Regular inspections ensure operational "
        "safety.",
    ),
    TitleInfo(
        36,
        "Parks, Forests, and Public Property",
        "NPS",
        "Public land management includes conservation programs, recreational access, and resource "
        "protection. Activities require permits and environmental assessments.",
    ),
    TitleInfo(
        37,
        "Patents, Trademarks, and Copyrights",
        "USPTO",
        "Intellectual property regulations establish application procedures, examination standards, "
        "and enforcement mechanisms. Applicants must provide detailed technical documentation.",
    ),
    TitleInfo(
        38,
        "Pensions, Bonuses, and Veterans' Relief",
        "VA",
        "Veterans benefits include disability compensation, education assistance, and healthcare "
        "services. Eligibility requires military service verification and medical documentation.",
    ),
    TitleInfo(
        39,
        "Postal Service",
        "USPS",
        "Postal regulations establish delivery standards, rate structures, and service requirements. "
        "Operations must meet universal service obligations and maintain delivery performance.",
    ),
    TitleInfo(
        40,
        "Protection of Environment",
        "EPA",
        "Environmental regulations establish pollution control standards, permit requirements, and "
        "enforcement procedures. Facilities must demonstrate compliance through monitoring and "
        "reporting.",
    ),
    TitleInfo(
        41,
        "Public Contracts and Property Management",
        "GSA",
        "Federal procurement regulations establish competition requirements, contract "
        "administration, and performance standards. Contractors must maintain detailed cost and "
        "performance records.",
    ),
    TitleInfo(
        42,
        "Public Health",
        "HHS",
        "Public health regulations establish disease surveillance, emergency preparedness, and "
        "healthcare quality standards. Providers must maintain patient records and report "
        "communicable diseases.",
    ),
    TitleInfo(
        43,
        "Public Lands: Interior",
        "BLM",
        "Land management regulations establish multiple use principles, conservation requirements, "
        "and recreational access. Activities require environmental impact assessments.",
    ),
    TitleInfo(
        44,
        "Emergency Management and Assistance",
        "FEMA",
        "Emergency management includes disaster preparedness, response coordination, and recovery "
        "assistance. Plans must address all hazards and include resource allocation.",
    ),
    TitleInfo(
        45,
        "Public Welfare",
        "ACF",
        "Welfare programs provide assistance to eligible individuals and families. Recipients must "
        "meet income and resource limitations and comply with work requirements.",
    ),
    TitleInfo(
        46,
        "Shipping",
        "FMC",
        "Maritime transportation regulations establish vessel safety, crew certification, and cargo "
        "handling standards. Operators must maintain inspection certificates and training records.",
    ),
    TitleInfo(
        47,
        "Telecommunication",
        "FCC",
        "Communications regulations establish service standards, spectrum management, and consumer "
        "protection requirements. Providers must maintain service quality and accessibility.",
    ),
    TitleInfo(
        48,
        "Federal Acquisition Regulations System",
        "FAR",
        "Procurement regulations establish competition requirements, contract terms, and "
        "administration procedures. Agencies must demonstrate best value and maintain procurement "
        "integrity.",
    ),
    TitleInfo(
        49,
        "Transportation",
        "DOT",
        "Transportation safety regulations establish vehicle standards, operator certification, and "
        "infrastructure requirements. Regular inspections ensure public safety.",
    ),
    TitleInfo(
        50,
        "Wildlife and Fisheries",
        "FWS",
        "Wildlife regulations establish conservation programs, hunting and fishing licenses, and "
        "habitat protection requirements. Activities require permits and species impact "
        "assessments.",
    ),
)

TITLES_BY_NUMBER: dict[int, TitleInfo] = {title.number: title for title in CFR_TITLES}


def title_info(number: int) -> TitleInfo:
    """Look a title up by number, synthesizing an entry for unknown numbers."""
    known = TITLES_BY_NUMBER.get(number)
    if known is not None:
        return known
    name = f"Title {number}"
    return TitleInfo(number, name, f"T{number}", generic_template(name))
