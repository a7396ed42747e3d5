# -*- coding: utf-8 -*-
"""Form state builders shared by the test modules."""

from services.wizard.form_state_store import FormStateStore

VALID_SA_ID = "8001015009087"
INVALID_SA_ID = "8001015009086"

PERSONAL_INFO = {
    "personalInfo.firstName": "Thandi",
    "personalInfo.lastName": "Mokoena",
    "personalInfo.idNumber": VALID_SA_ID,
    "personalInfo.email": "thandi@example.co.za",
    "personalInfo.phone": "082 123 4567",
    "personalInfo.streetAddress": "12 Long Street",
    "personalInfo.city": "Cape Town",
    "personalInfo.postalCode": "8001",
}

COMPANY_INFO = {
    "companyInfo.companyName": "Karoo Haulage (Pty) Ltd",
    "companyInfo.registrationNumber": "2015/123456/07",
    "companyInfo.industry": "logistics",
    "companyInfo.contactPerson": "Thandi Mokoena",
    "companyInfo.contactEmail": "ops@karoohaulage.co.za",
    "companyInfo.contactPhone": "0831234567",
    "companyInfo.numberOfEmployees": 25,
    "companyInfo.annualTurnover": 4500000,
    "companyInfo.streetAddress": "3 Depot Road",
    "companyInfo.city": "Bloemfontein",
    "companyInfo.postalCode": "9301",
}

CURRENT_SITUATION = {
    "needsAnalysis.currentSituation.hasExistingInsurance": False,
    "needsAnalysis.currentSituation.previouslyDeclined": False,
    "needsAnalysis.currentSituation.claimsHistory.hasClaimsLastThreeYears": False,
}

COVERAGE_NEEDS = {
    "needsAnalysis.coveragePreferences.coverageType": "comprehensive",
    "needsAnalysis.coveragePreferences.sumInsured": 250000,
}

AUTO_RISK_FACTORS = {
    "needsAnalysis.riskFactors.parkingOvernight": "garage",
    "needsAnalysis.riskFactors.trackingDevice": True,
    "needsAnalysis.riskFactors.annualMileage": 15000,
    "needsAnalysis.riskFactors.primaryUse": "private",
}

PREFERENCES = {
    "needsAnalysis.budgetPreferences.maxMonthlyPremium": 1200,
    "needsAnalysis.budgetPreferences.paymentFrequency": "monthly",
    "needsAnalysis.budgetPreferences.preferredContactMethod": "email",
}

VEHICLE_DETAILS = {
    "insuranceInfo.vehicleYear": 2019,
    "insuranceInfo.vehicleMake": "Toyota",
    "insuranceInfo.vehicleModel": "Corolla",
    "insuranceInfo.vehicleValue": 240000,
    "insuranceInfo.registrationNumber": "CA 123-456",
    "insuranceInfo.vehicleFinanced": False,
}

DRIVER_DETAILS = {
    "needsAnalysis.driverDetails.isRegularDriverPolicyholder": True,
    "needsAnalysis.driverDetails.licenceType": "code-b",
    "needsAnalysis.driverDetails.yearsLicensed": 8,
    "needsAnalysis.driverDetails.claimsHistory": "none",
}

CO_INSURED = {
    "coInsured.hasCoInsured": False,
}

DISCLOSURE = {
    "declarations.disclosureAcknowledged": True,
    "declarations.informationAccurate": True,
}

# Everything an auto applicant fills in before the consent step
AUTO_BEFORE_CONSENT = [
    PERSONAL_INFO,
    CURRENT_SITUATION,
    COVERAGE_NEEDS,
    AUTO_RISK_FACTORS,
    PREFERENCES,
    VEHICLE_DETAILS,
    DRIVER_DETAILS,
    CO_INSURED,
    DISCLOSURE,
]


def fill(state, *groups):
    """Apply several path -> value groups to a form state."""
    for group in groups:
        state = FormStateStore.set_many(state, group)
    return state
