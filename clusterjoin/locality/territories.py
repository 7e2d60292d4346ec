# GKE cluster region -> ISO 3166 country code, for data residency rules.
GCP_TERRITORIES: dict[str, str] = {
    "asia-south1": "IN",
    "asia-southeast1": "SG",
    "asia-east2": "CN",
    "asia-east1": "TW",
    "asia-northeast1": "JP",
    "asia-northeast2": "JP",
    "australia-southeast1": "AU",
    "europe-west2": "GB",
    "europe-west1": "BE",
    "europe-west4": "NL",
    "europe-west6": "CH",
    "europe-west3": "DE",
    "europe-north1": "FI",
    "us-west1": "US",
    "us-west2": "US",
    "us-central1": "US",
    "us-east1": "US",
    "us-east4": "US",
    "northamerica-northeast1": "CA",
    "southamerica-east1": "BR",
}

# GCP area prefix -> continent code, for geo proximity.
GCP_AREAS: dict[str, str] = {
    "asia": "AS",
    "europe": "EU",
    "northamerica": "NA",
    "us": "NA",
    "southamerica": "SA",
    "australia": "OC",
}
