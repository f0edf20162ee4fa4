"""Prompt for the priority oracle."""

from __future__ import annotations

from decimal import Decimal


SYSTEM_PROMPT = """You are a medical claims categorization expert.
You assign processing priority to healthcare claims and answer with JSON only."""

CATEGORIZATION_PROMPT = """Analyze the following healthcare claim and categorize it by priority level.

**Claim Details:**
- CPT Code: {cpt_code}
- ICD-10 Diagnosis Code: {icd10_code}
- Billed Amount: ${billed_amount}
{age_line}
**Priority Categories:**

URGENT - Assign if ANY of the following apply:
- Emergency department visits (CPT 99281-99285)
- Life-threatening conditions (heart attack, stroke, severe trauma, etc.)
- High-cost claims (>${urgent_threshold}) indicating major procedures
- Critical care or intensive care services
- Time-sensitive treatments requiring immediate processing

STANDARD - Assign if:
- Routine hospitalizations or surgeries
- Moderate-cost procedures (${routine_threshold}-${urgent_threshold})
- Non-emergency but medically necessary care
- Diagnostic imaging for non-urgent conditions
- Chronic disease management visits

ROUTINE - Assign if:
- Preventive care (annual physicals, vaccinations)
- Well visits and health screenings
- Low-cost procedures (<${routine_threshold})
- Minor acute conditions (colds, minor injuries)
- Follow-up visits for resolved conditions

**Instructions:**
1. Consider CPT code context (emergency vs routine)
2. Evaluate ICD-10 severity (life-threatening vs minor)
3. Factor in cost as an indicator of procedure complexity
4. Provide your reasoning in 1-2 sentences

**Response Format (JSON only):**
{{"priority": "URGENT" | "STANDARD" | "ROUTINE", "confidence": 0.0-1.0, "reasoning": "Brief explanation"}}

Respond ONLY with valid JSON, no additional text."""


def build_categorization_prompt(
    cpt_code: str,
    icd10_code: str,
    billed_amount: Decimal | float,
    patient_age: int | None = None,
    urgent_threshold: float = 5000.0,
    routine_threshold: float = 500.0,
) -> str:
    """Render the user prompt. The age line is left out when the age is unknown."""
    age_line = f"- Patient Age: {patient_age} years\n" if patient_age is not None else ""
    return CATEGORIZATION_PROMPT.format(
        cpt_code=cpt_code,
        icd10_code=icd10_code,
        billed_amount=f"{Decimal(str(billed_amount)):.2f}",
        age_line=age_line,
        urgent_threshold=f"{urgent_threshold:,.0f}",
        routine_threshold=f"{routine_threshold:,.0f}",
    )
